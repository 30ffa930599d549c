"""Domain Value Objects"""
from pydantic import BaseModel, Field, validator
from datetime import date
from decimal import Decimal
from typing import Optional


class DateRange(BaseModel):
    """Value Object for a half-open stay period [check_in, check_out)"""
    check_in: date
    check_out: date

    @validator('check_out')
    def check_out_after_check_in(cls, v, values):
        if 'check_in' in values and v <= values['check_in']:
            raise ValueError('Check-out must be after check-in')
        return v

    def nights(self) -> int:
        """Calculate number of nights"""
        return (self.check_out - self.check_in).days

    def overlaps(self, check_in: date, check_out: date) -> bool:
        """Adjacent ranges sharing an endpoint do not overlap"""
        return not (check_out <= self.check_in or check_in >= self.check_out)

    class Config:
        frozen = True


class PaymentReceipt(BaseModel):
    """Outcome reported by a payment gateway"""
    success: bool
    amount: Decimal = Field(ge=0)
    method: str
    reference: str
    message: Optional[str] = None

    class Config:
        frozen = True
