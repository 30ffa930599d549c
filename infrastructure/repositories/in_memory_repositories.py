"""In-Memory Repository Implementations"""
from typing import Optional, List, Dict

from domain.repositories import RoomRepository, ReservationRepository
from domain.entities import Room, Reservation
from domain.enums import RoomType


class InMemoryRoomRepository(RoomRepository):
    """In-memory implementation of RoomRepository"""

    def __init__(self):
        # dicts keep insertion order, which is the catalog order
        self._storage: Dict[int, Room] = {}

    def add(self, room: Room) -> Room:
        """Add room to memory"""
        if room.id in self._storage:
            raise ValueError(f"Room {room.id} already exists")
        self._storage[room.id] = room
        return room

    def find_by_id(self, room_id: int) -> Optional[Room]:
        """Find room by ID"""
        return self._storage.get(room_id)

    def find_by_type(self, room_type: RoomType) -> List[Room]:
        """Find rooms of a type"""
        return [r for r in self._storage.values() if r.type == room_type]

    def find_all(self) -> List[Room]:
        """Find all rooms"""
        return list(self._storage.values())


class InMemoryReservationRepository(ReservationRepository):
    """In-memory implementation of ReservationRepository"""

    def __init__(self):
        self._ledger: List[Reservation] = []
        self._index: Dict[str, Reservation] = {}

    def add(self, reservation: Reservation) -> Reservation:
        """Append reservation to memory"""
        key = reservation.reservation_id.lower()
        if key in self._index:
            raise ValueError(f"Reservation {reservation.reservation_id} already exists")
        self._ledger.append(reservation)
        self._index[key] = reservation
        return reservation

    def find_by_id(self, reservation_id: str) -> Optional[Reservation]:
        """Find reservation by ID"""
        return self._index.get((reservation_id or "").strip().lower())

    def find_by_room(self, room_id: int) -> List[Reservation]:
        """Find reservations on a room"""
        return [r for r in self._ledger if r.room.id == room_id]

    def find_all(self) -> List[Reservation]:
        """Find all reservations"""
        return list(self._ledger)
