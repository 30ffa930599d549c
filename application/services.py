"""Application Services - Business use cases"""
import logging
import re
from datetime import date
from typing import List, Optional

from application.context import HotelContext
from domain.entities import Room, Reservation, CancellationResult
from domain.enums import RoomType, CancelOutcome
from domain.exceptions import ValidationError, PaymentDeclinedError, PersistenceError, UnsavedChangesError
from domain.value_objects import DateRange

logger = logging.getLogger(__name__)

_RESERVATION_ID_PATTERN = re.compile(r"^R(\d+)$", re.IGNORECASE)


def _validate_date_range(check_in: date, check_out: date) -> None:
    if check_out <= check_in:
        raise ValidationError("invalid date range")


def _persist(context: HotelContext, reservation: Reservation, action: str) -> None:
    """Snapshot after a mutation. The mutation stays in memory if the save fails."""
    try:
        context.save()
    except PersistenceError as e:
        raise UnsavedChangesError(
            f"Reservation {reservation.reservation_id} was {action} but could not be saved: {e}",
            reservation=reservation
        ) from e


class AvailabilityService:
    """Service for availability searches"""

    def __init__(self, context: HotelContext):
        self.context = context

    def available_rooms(self, room_type: RoomType, check_in: date, check_out: date) -> List[Room]:
        """Rooms of ``room_type`` free for [check_in, check_out), in catalog order.

        Callers are expected to have checked check_in < check_out.
        """
        return [
            room for room in self.context.rooms.find_by_type(room_type)
            if self.is_room_available(room, check_in, check_out)
        ]

    def is_room_available(self, room: Room, check_in: date, check_out: date) -> bool:
        """Check no active reservation on the room overlaps the range"""
        for reservation in self.context.reservations.find_by_room(room.id):
            if reservation.blocks(room, check_in, check_out):
                return False
        return True

    def search(self, room_type: RoomType, check_in: date, check_out: date) -> List[Room]:
        """Validate the range, then list available rooms"""
        _validate_date_range(check_in, check_out)
        return self.available_rooms(room_type, check_in, check_out)


class BookingService:
    """Service for creating reservations"""

    def __init__(self, context: HotelContext, availability: Optional[AvailabilityService] = None):
        self.context = context
        self.availability = availability or AvailabilityService(context)

    def book(
        self,
        guest_name: str,
        guest_phone: str,
        room_type: RoomType,
        check_in: date,
        check_out: date,
        room_id: int,
        payment_method: str,
        txn_ref: str
    ) -> Reservation:
        """Book ``room_id`` for [check_in, check_out) and charge the guest.

        Raises ValidationError (empty name, invalid date range, room unavailable)
        or PaymentDeclinedError without touching the ledger. Raises
        UnsavedChangesError if the booking was recorded but the snapshot failed.
        """
        if not (guest_name or "").strip():
            raise ValidationError("empty name")
        _validate_date_range(check_in, check_out)

        room = self._resolve_room(room_type, check_in, check_out, room_id)
        if room is None:
            raise ValidationError("room unavailable")

        date_range = DateRange(check_in=check_in, check_out=check_out)
        total_price = room.price_for(date_range.nights())

        receipt = self.context.payment_gateway.process(total_price, payment_method, txn_ref)
        if not receipt.success:
            raise PaymentDeclinedError(receipt.message or "payment declined")

        reservation = Reservation.create(
            reservation_id=self._next_reservation_id(),
            guest_name=guest_name,
            guest_phone=guest_phone,
            room=room,
            date_range=date_range,
            payment_method=payment_method,
            created_at=self.context.clock()
        )
        self.context.reservations.add(reservation)
        logger.info(
            f"Created reservation {reservation.reservation_id} for room {room.id} "
            f"({check_in} to {check_out}, total {reservation.total_price})"
        )

        _persist(self.context, reservation, "booked")
        return reservation

    def _resolve_room(self, room_type: RoomType, check_in: date, check_out: date, room_id: int) -> Optional[Room]:
        for room in self.availability.available_rooms(room_type, check_in, check_out):
            if room.id == room_id:
                return room
        return None

    def _next_reservation_id(self) -> str:
        """'R' + epoch milliseconds, bumped past every id already in the ledger"""
        candidate = int(self.context.clock().timestamp() * 1000)
        highest = 0
        for reservation in self.context.reservations.find_all():
            match = _RESERVATION_ID_PATTERN.match(reservation.reservation_id)
            if match:
                highest = max(highest, int(match.group(1)))
        return f"R{max(candidate, highest + 1)}"


class CancellationService:
    """Service for cancelling reservations"""

    def __init__(self, context: HotelContext):
        self.context = context

    def cancel(self, reservation_id: str) -> CancellationResult:
        """Cancel by id (case-insensitive). Cancelling twice is a no-op."""
        reservation = self.context.reservations.find_by_id(reservation_id)
        if reservation is None:
            return CancellationResult(outcome=CancelOutcome.NOT_FOUND)

        if not reservation.cancel():
            return CancellationResult(outcome=CancelOutcome.ALREADY_CANCELLED, reservation=reservation)

        logger.info(f"Cancelled reservation {reservation.reservation_id}")
        _persist(self.context, reservation, "cancelled")
        return CancellationResult(outcome=CancelOutcome.CANCELLED, reservation=reservation)


class ReservationService:
    """Service for read-only catalog and ledger lookups"""

    def __init__(self, context: HotelContext):
        self.context = context

    def get_reservation(self, reservation_id: str) -> Optional[Reservation]:
        """Get reservation by ID"""
        return self.context.reservations.find_by_id(reservation_id)

    def get_all_reservations(self) -> List[Reservation]:
        """Get all reservations, cancelled ones included"""
        return self.context.reservations.find_all()

    def get_all_rooms(self) -> List[Room]:
        """Get the whole catalog"""
        return self.context.rooms.find_all()
