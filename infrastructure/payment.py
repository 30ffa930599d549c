"""Payment gateway implementations"""
import logging
from decimal import Decimal

from domain.payment import PaymentGateway
from domain.value_objects import PaymentReceipt

logger = logging.getLogger(__name__)


class SimulatedPaymentGateway(PaymentGateway):
    """Accepts every charge. No money moves."""

    def process(self, amount: Decimal, method: str, reference: str) -> PaymentReceipt:
        logger.info(f"Processing payment of {amount} via {method or 'unspecified'} with reference: {reference}")
        return PaymentReceipt(
            success=True,
            amount=amount,
            method=method,
            reference=reference,
            message="Payment successful (simulated)."
        )
