"""JSON file snapshot store.

The whole catalog and ledger are written as one document on every save.
Writes go to a temporary file in the target directory which is then renamed
over the previous snapshot, so a reader never sees a half-written file.
"""
import logging
import os
import tempfile
from datetime import date, datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from domain.entities import Room, Reservation
from domain.enums import RoomType, ReservationStatus
from domain.exceptions import PersistenceError
from domain.repositories import HotelSnapshot, SnapshotStore
from domain.value_objects import DateRange

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


# ============================================================================
# ON-DISK RECORDS
# ============================================================================

class RoomRecord(BaseModel):
    id: int
    type: RoomType
    price_per_night: Decimal = Field(ge=0)
    capacity: int

    @classmethod
    def from_room(cls, room: Room) -> "RoomRecord":
        return cls(
            id=room.id,
            type=room.type,
            price_per_night=room.price_per_night,
            capacity=room.capacity
        )

    def to_room(self) -> Room:
        return Room(
            id=self.id,
            type=self.type,
            price_per_night=self.price_per_night,
            capacity=self.capacity
        )


class ReservationRecord(BaseModel):
    reservation_id: str
    guest_name: str
    guest_phone: str = ""
    room_id: int
    check_in: date
    check_out: date
    total_price: Decimal = Field(ge=0)
    payment_method: str = ""
    cancelled: bool = False
    created_at: Optional[datetime] = None

    @classmethod
    def from_reservation(cls, reservation: Reservation) -> "ReservationRecord":
        return cls(
            reservation_id=reservation.reservation_id,
            guest_name=reservation.guest_name,
            guest_phone=reservation.guest_phone,
            room_id=reservation.room.id,
            check_in=reservation.check_in,
            check_out=reservation.check_out,
            total_price=reservation.total_price,
            payment_method=reservation.payment_method,
            cancelled=reservation.cancelled,
            created_at=reservation.created_at
        )

    def to_reservation(self, room: Room) -> Reservation:
        fields = dict(
            reservation_id=self.reservation_id,
            guest_name=self.guest_name,
            guest_phone=self.guest_phone,
            room=room,
            date_range=DateRange(check_in=self.check_in, check_out=self.check_out),
            total_price=self.total_price,
            payment_method=self.payment_method,
            status=ReservationStatus.CANCELLED if self.cancelled else ReservationStatus.ACTIVE
        )
        if self.created_at is not None:
            fields["created_at"] = self.created_at
        return Reservation(**fields)


class SnapshotDocument(BaseModel):
    schema_version: int
    saved_at: Optional[datetime] = None
    rooms: List[RoomRecord] = []
    reservations: List[ReservationRecord] = []


# ============================================================================
# STORE
# ============================================================================

class JsonSnapshotStore(SnapshotStore):
    """Snapshot store backed by a single JSON file"""

    def __init__(self, file_path: str, strict: bool = False):
        self._path = Path(file_path)
        self._strict = strict

    def load(self) -> Optional[HotelSnapshot]:
        if not self._path.exists():
            logger.info(f"No snapshot at {self._path}, starting empty")
            return None

        try:
            with open(self._path, "r", encoding="utf-8") as f:
                raw = f.read()
            document = SnapshotDocument.model_validate_json(raw)
            snapshot = self._to_snapshot(document)
        except (OSError, ValueError, PersistenceError) as e:
            return self._discard(e)

        logger.info(
            f"Loaded {len(snapshot.rooms)} rooms and {len(snapshot.reservations)} reservations from {self._path}"
        )
        return snapshot

    def save(self, rooms: List[Room], reservations: List[Reservation]) -> None:
        document = SnapshotDocument(
            schema_version=SCHEMA_VERSION,
            saved_at=datetime.now(timezone.utc),
            rooms=[RoomRecord.from_room(r) for r in rooms],
            reservations=[ReservationRecord.from_reservation(r) for r in reservations]
        )
        payload = document.model_dump_json(indent=2)

        tmp_path = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=str(self._path.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self._path)
        except OSError as e:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)
            logger.error(f"Error saving data to {self._path}: {e}")
            raise PersistenceError(f"Error saving data: {e}") from e

        logger.debug(f"Saved {len(rooms)} rooms and {len(reservations)} reservations to {self._path}")

    # ==================== PRIVATE HELPERS ====================
    def _to_snapshot(self, document: SnapshotDocument) -> HotelSnapshot:
        if document.schema_version != SCHEMA_VERSION:
            raise PersistenceError(f"Unsupported snapshot schema version {document.schema_version}")

        rooms_by_id: Dict[int, Room] = {}
        for record in document.rooms:
            if record.id in rooms_by_id:
                raise PersistenceError(f"Duplicate room id {record.id}")
            rooms_by_id[record.id] = record.to_room()

        reservations: List[Reservation] = []
        seen_ids = set()
        for record in document.reservations:
            room = rooms_by_id.get(record.room_id)
            if room is None:
                raise PersistenceError(
                    f"Reservation {record.reservation_id} references unknown room {record.room_id}"
                )
            key = record.reservation_id.lower()
            if key in seen_ids:
                raise PersistenceError(f"Duplicate reservation id {record.reservation_id}")
            seen_ids.add(key)
            reservations.append(record.to_reservation(room))

        return HotelSnapshot(rooms=list(rooms_by_id.values()), reservations=reservations)

    def _discard(self, error: Exception) -> Optional[HotelSnapshot]:
        if self._strict:
            raise PersistenceError(f"Could not load existing data from {self._path}: {error}") from error
        # The file is left in place; the next save overwrites it.
        logger.warning(f"Could not load existing data from {self._path}, starting with defaults: {error}")
        return None
