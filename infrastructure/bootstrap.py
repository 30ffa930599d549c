"""Wires repositories, snapshot store and payment gateway into a HotelContext"""
import logging
from decimal import Decimal
from typing import List, Optional

from application.context import HotelContext
from domain.entities import Room
from domain.enums import RoomType
from domain.exceptions import PersistenceError
from domain.payment import PaymentGateway
from domain.repositories import SnapshotStore
from infrastructure.config import Settings
from infrastructure.payment import SimulatedPaymentGateway
from infrastructure.persistence.json_snapshot_store import JsonSnapshotStore
from infrastructure.repositories.in_memory_repositories import (
    InMemoryRoomRepository, InMemoryReservationRepository
)

logger = logging.getLogger(__name__)


def default_rooms() -> List[Room]:
    """Catalog used when storage holds no rooms"""
    return [
        Room(id=101, type=RoomType.STANDARD, price_per_night=Decimal("2000"), capacity=2),
        Room(id=102, type=RoomType.STANDARD, price_per_night=Decimal("2200"), capacity=2),
        Room(id=201, type=RoomType.DELUXE, price_per_night=Decimal("3500"), capacity=3),
        Room(id=202, type=RoomType.DELUXE, price_per_night=Decimal("3800"), capacity=3),
        Room(id=301, type=RoomType.SUITE, price_per_night=Decimal("6000"), capacity=4),
        Room(id=302, type=RoomType.SUITE, price_per_night=Decimal("6500"), capacity=4),
    ]


def bootstrap_context(store: SnapshotStore,
                      payment_gateway: Optional[PaymentGateway] = None,
                      **context_kwargs) -> HotelContext:
    """Hydrate a context from ``store``, seeding the default catalog if it has no rooms"""
    context = HotelContext(
        rooms=InMemoryRoomRepository(),
        reservations=InMemoryReservationRepository(),
        store=store,
        payment_gateway=payment_gateway or SimulatedPaymentGateway(),
        **context_kwargs
    )

    snapshot = store.load()
    if snapshot is not None:
        context.rooms.add_all(snapshot.rooms)
        context.reservations.add_all(snapshot.reservations)

    if context.rooms.is_empty():
        context.rooms.add_all(default_rooms())
        logger.info("Seeded default room catalog")
        try:
            context.save()
        except PersistenceError as e:
            logger.warning(f"Default catalog not saved yet: {e}")

    return context


def create_context(settings: Settings) -> HotelContext:
    store = JsonSnapshotStore(settings.data_file, strict=settings.strict_load)
    return bootstrap_context(store)
