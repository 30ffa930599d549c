"""Domain Repository Interfaces"""
from abc import ABC, abstractmethod
from pydantic import BaseModel
from typing import Optional, List, Iterable

from domain.entities import Room, Reservation
from domain.enums import RoomType


class RoomRepository(ABC):
    """Repository interface for the Room catalog"""

    @abstractmethod
    def add(self, room: Room) -> Room:
        """Add room to the catalog"""
        pass

    @abstractmethod
    def find_by_id(self, room_id: int) -> Optional[Room]:
        """Find room by ID"""
        pass

    @abstractmethod
    def find_by_type(self, room_type: RoomType) -> List[Room]:
        """Find rooms of a type, in catalog order"""
        pass

    @abstractmethod
    def find_all(self) -> List[Room]:
        """Find all rooms, in catalog order"""
        pass

    def add_all(self, rooms: Iterable[Room]) -> None:
        for room in rooms:
            self.add(room)

    def is_empty(self) -> bool:
        return not self.find_all()


class ReservationRepository(ABC):
    """Repository interface for the Reservation ledger"""

    @abstractmethod
    def add(self, reservation: Reservation) -> Reservation:
        """Append reservation to the ledger"""
        pass

    @abstractmethod
    def find_by_id(self, reservation_id: str) -> Optional[Reservation]:
        """Find reservation by ID, ignoring case"""
        pass

    @abstractmethod
    def find_by_room(self, room_id: int) -> List[Reservation]:
        """Find reservations on a room, cancelled ones included"""
        pass

    @abstractmethod
    def find_all(self) -> List[Reservation]:
        """Find all reservations, in creation order"""
        pass

    def add_all(self, reservations: Iterable[Reservation]) -> None:
        for reservation in reservations:
            self.add(reservation)


class HotelSnapshot(BaseModel):
    """Full catalog and ledger at one point in time"""
    rooms: List[Room] = []
    reservations: List[Reservation] = []


class SnapshotStore(ABC):
    """Storage port for whole-state snapshots"""

    @abstractmethod
    def load(self) -> Optional[HotelSnapshot]:
        """Read the stored snapshot, or None when there is nothing usable"""
        pass

    @abstractmethod
    def save(self, rooms: List[Room], reservations: List[Reservation]) -> None:
        """Overwrite the stored snapshot; raises PersistenceError on failure"""
        pass
