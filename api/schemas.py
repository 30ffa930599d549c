"""API Schemas - Request and Response DTOs"""
from pydantic import BaseModel, Field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from domain.enums import RoomType


# ============================================================================
# ROOM SCHEMAS
# ============================================================================

class RoomResponse(BaseModel):
    """Room response DTO"""
    id: int
    type: str
    price_per_night: Decimal
    capacity: int


# ============================================================================
# RESERVATION SCHEMAS
# ============================================================================

class CreateReservationRequest(BaseModel):
    """Create reservation request DTO"""
    guest_name: str
    guest_phone: str = ""
    room_type: RoomType
    check_in: date
    check_out: date
    room_id: int = Field(gt=0)
    payment_method: str = Field(default="", description="Card, UPI, Cash, ...")
    transaction_reference: str = Field(default="", description="Reference passed to the payment gateway")


class ReservationResponse(BaseModel):
    """Reservation response DTO"""
    reservation_id: str
    guest_name: str
    guest_phone: str
    room_id: int
    room_type: str
    check_in: date
    check_out: date
    nights: int
    total_price: Decimal
    payment_method: str
    status: str
    cancelled: bool
    created_at: datetime


class CancellationResponse(BaseModel):
    """Cancellation outcome DTO"""
    outcome: str
    reservation: Optional[ReservationResponse] = None


# ============================================================================
# AUTH SCHEMAS
# ============================================================================

class Token(BaseModel):
    access_token: str
    token_type: str


class UserResponse(BaseModel):
    username: str
    full_name: Optional[str] = None
    disabled: bool = False
