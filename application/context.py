"""Hotel Context - the session-owned state every service works against"""
from datetime import datetime, timezone
from typing import Callable

from domain.repositories import RoomRepository, ReservationRepository, SnapshotStore
from domain.payment import PaymentGateway


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class HotelContext:
    """Catalog, ledger and their collaborators for one session.

    Built once by the top-level shell and handed to each service. Services
    mutate the ledger only through this object.
    """

    def __init__(self,
                 rooms: RoomRepository,
                 reservations: ReservationRepository,
                 store: SnapshotStore,
                 payment_gateway: PaymentGateway,
                 clock: Callable[[], datetime] = utc_now):
        self.rooms = rooms
        self.reservations = reservations
        self.store = store
        self.payment_gateway = payment_gateway
        self.clock = clock

    def save(self) -> None:
        """Write the full catalog and ledger; raises PersistenceError"""
        self.store.save(self.rooms.find_all(), self.reservations.find_all())
