"""Domain Entities - Room catalog and reservation ledger records"""
from pydantic import BaseModel, Field
from datetime import datetime, date, timezone
from typing import Optional
from decimal import Decimal

from domain.enums import RoomType, ReservationStatus, CancelOutcome
from domain.exceptions import ValidationError
from domain.value_objects import DateRange


class Room(BaseModel):
    """Room Entity - immutable once seeded or loaded"""

    id: int = Field(gt=0)
    type: RoomType
    price_per_night: Decimal = Field(ge=0)
    capacity: int = Field(gt=0)

    class Config:
        frozen = True
        from_attributes = True

    def price_for(self, nights: int) -> Decimal:
        """Total price for a stay of ``nights`` nights"""
        return self.price_per_night * nights


class Reservation(BaseModel):
    """Reservation Aggregate Root Entity"""

    # Identity
    reservation_id: str

    # Guest
    guest_name: str
    guest_phone: str = ""

    # Shared reference into the catalog, never copied
    room: Room

    # Value Objects
    date_range: DateRange
    total_price: Decimal = Field(ge=0)
    payment_method: str = ""

    status: ReservationStatus = ReservationStatus.ACTIVE

    # Metadata
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        from_attributes = True

    # ==================== FACTORY METHOD ====================
    @staticmethod
    def create(
        reservation_id: str,
        guest_name: str,
        guest_phone: str,
        room: Room,
        date_range: DateRange,
        payment_method: str,
        created_at: Optional[datetime] = None
    ) -> "Reservation":
        """Create new active reservation priced from the room rate"""
        guest_name = (guest_name or "").strip()
        if not guest_name:
            raise ValidationError("empty name")

        reservation = Reservation(
            reservation_id=reservation_id,
            guest_name=guest_name,
            guest_phone=(guest_phone or "").strip(),
            room=room,
            date_range=date_range,
            total_price=room.price_for(date_range.nights()),
            payment_method=(payment_method or "").strip(),
            status=ReservationStatus.ACTIVE,
        )
        if created_at is not None:
            reservation.created_at = created_at
        return reservation

    # ==================== STATE TRANSITION METHODS ====================
    def cancel(self) -> bool:
        """Move to CANCELLED. Returns False when already cancelled.

        The transition is one-way; there is no way back to ACTIVE.
        """
        if self.status == ReservationStatus.CANCELLED:
            return False
        self.status = ReservationStatus.CANCELLED
        return True

    # ==================== QUERY METHODS ====================
    @property
    def cancelled(self) -> bool:
        return self.status == ReservationStatus.CANCELLED

    @property
    def check_in(self) -> date:
        return self.date_range.check_in

    @property
    def check_out(self) -> date:
        return self.date_range.check_out

    @property
    def room_id(self) -> int:
        return self.room.id

    def get_nights(self) -> int:
        """Get number of nights"""
        return self.date_range.nights()

    def blocks(self, room: Room, check_in: date, check_out: date) -> bool:
        """True if this reservation keeps ``room`` occupied during the range"""
        if self.cancelled or self.room.id != room.id:
            return False
        return self.date_range.overlaps(check_in, check_out)


class CancellationResult(BaseModel):
    """Outcome of a cancellation request.

    ``reservation`` is set for CANCELLED and ALREADY_CANCELLED, None for NOT_FOUND.
    """
    outcome: CancelOutcome
    reservation: Optional[Reservation] = None

    class Config:
        frozen = True
