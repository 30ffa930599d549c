"""Domain Payment Port"""
from abc import ABC, abstractmethod
from decimal import Decimal

from domain.value_objects import PaymentReceipt


class PaymentGateway(ABC):
    """Collaborator that charges a guest for a booking"""

    @abstractmethod
    def process(self, amount: Decimal, method: str, reference: str) -> PaymentReceipt:
        """Charge ``amount`` with ``method``; ``reference`` is the caller's transaction ref"""
        pass
