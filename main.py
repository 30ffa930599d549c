import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Depends
from fastapi.security import OAuth2PasswordRequestForm

from api.schemas import (
    RoomResponse, CreateReservationRequest, ReservationResponse, CancellationResponse,
    Token, UserResponse
)
from api.dependencies import get_current_active_user, get_staff_user
from application.context import HotelContext
from application.services import AvailabilityService, BookingService, CancellationService, ReservationService
from domain.auth import StaffUser
from domain.entities import Room, Reservation
from domain.enums import RoomType, CancelOutcome
from domain.exceptions import ValidationError, PaymentDeclinedError, PersistenceError, UnsavedChangesError
from infrastructure.bootstrap import create_context
from infrastructure.config import Settings, get_settings, configure_logging
from infrastructure.security import verify_password, create_access_token

logger = logging.getLogger(__name__)

# Built on first request so importing this module never touches the data file
_context: Optional[HotelContext] = None


def get_hotel_context() -> HotelContext:
    global _context
    if _context is None:
        _context = create_context(get_settings())
    return _context


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    if _context is not None:
        try:
            _context.save()
        except PersistenceError as e:
            logger.error(f"Final save failed: {e}")


app = FastAPI(
    title="Hotel Reservation API",
    description="Room availability, booking and cancellation for a single hotel",
    version="1.0.0",
    lifespan=lifespan
)


# Dependency injection
def get_availability_service(context: HotelContext = Depends(get_hotel_context)) -> AvailabilityService:
    return AvailabilityService(context)

def get_booking_service(context: HotelContext = Depends(get_hotel_context)) -> BookingService:
    return BookingService(context)

def get_cancellation_service(context: HotelContext = Depends(get_hotel_context)) -> CancellationService:
    return CancellationService(context)

def get_reservation_service(context: HotelContext = Depends(get_hotel_context)) -> ReservationService:
    return ReservationService(context)

# ============================================================================
# HEALTH & ENUM REFERENCE ENDPOINTS
# ============================================================================

@app.get("/api/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "message": "API is running"}

@app.get("/api/enums/room-type", tags=["Enum Reference"])
async def get_room_types():
    """Get all RoomType enum values"""
    return {
        "values": [item.name for item in RoomType],
        "description": "Room type values: STANDARD, DELUXE, SUITE"
    }

# ============================================================================
# AUTH ENDPOINTS
# ============================================================================

@app.post("/token", response_model=Token, tags=["Auth"])
async def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    settings: Settings = Depends(get_settings)
):
    user = get_staff_user(form_data.username, settings)
    if not user or not verify_password(form_data.password, user.hashed_password):
        raise HTTPException(
            status_code=401,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    access_token = create_access_token(user.username, settings)
    return {"access_token": access_token, "token_type": "bearer"}

@app.get("/users/me", response_model=UserResponse, tags=["Auth"])
async def read_users_me(current_user: StaffUser = Depends(get_current_active_user)):
    return current_user

# ============================================================================
# ROOM ENDPOINTS
# ============================================================================

@app.get("/api/rooms", response_model=List[RoomResponse], tags=["Rooms"])
async def list_rooms(service: ReservationService = Depends(get_reservation_service)):
    """List the whole room catalog"""
    return [_room_to_response(r) for r in service.get_all_rooms()]

@app.get("/api/rooms/available", response_model=List[RoomResponse], tags=["Rooms"])
async def search_available_rooms(
    room_type: RoomType,
    check_in: date,
    check_out: date,
    service: AvailabilityService = Depends(get_availability_service)
):
    """Rooms of a type free for [check_in, check_out)"""
    try:
        rooms = service.search(room_type, check_in, check_out)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return [_room_to_response(r) for r in rooms]

# ============================================================================
# RESERVATION ENDPOINTS
# ============================================================================
# Mutating endpoints stay `async def` so the sync services, and the snapshot
# save they trigger, run on the event loop one request at a time. As plain
# `def` they would run concurrently in the threadpool against one context.

@app.post("/api/reservations", response_model=ReservationResponse, status_code=201, tags=["Reservations"])
async def create_reservation(
    request: CreateReservationRequest,
    service: BookingService = Depends(get_booking_service),
    current_user: StaffUser = Depends(get_current_active_user)
):
    """Book a room and take (simulated) payment"""
    try:
        reservation = service.book(
            guest_name=request.guest_name,
            guest_phone=request.guest_phone,
            room_type=request.room_type,
            check_in=request.check_in,
            check_out=request.check_out,
            room_id=request.room_id,
            payment_method=request.payment_method,
            txn_ref=request.transaction_reference
        )
    except (ValidationError, PaymentDeclinedError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UnsavedChangesError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return _reservation_to_response(reservation)

@app.get("/api/reservations", response_model=List[ReservationResponse], tags=["Reservations"])
async def get_all_reservations(
    service: ReservationService = Depends(get_reservation_service),
    current_user: StaffUser = Depends(get_current_active_user)
):
    """Get all reservations"""
    return [_reservation_to_response(r) for r in service.get_all_reservations()]

@app.get("/api/reservations/{reservation_id}", response_model=ReservationResponse, tags=["Reservations"])
async def get_reservation(
    reservation_id: str,
    service: ReservationService = Depends(get_reservation_service),
    current_user: StaffUser = Depends(get_current_active_user)
):
    """Get reservation by ID"""
    reservation = service.get_reservation(reservation_id)
    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")
    return _reservation_to_response(reservation)

@app.post("/api/reservations/{reservation_id}/cancel", response_model=CancellationResponse, tags=["Reservations"])
async def cancel_reservation(
    reservation_id: str,
    service: CancellationService = Depends(get_cancellation_service),
    current_user: StaffUser = Depends(get_current_active_user)
):
    """Cancel reservation; cancelling twice reports ALREADY_CANCELLED"""
    try:
        result = service.cancel(reservation_id)
    except UnsavedChangesError as e:
        raise HTTPException(status_code=503, detail=str(e))
    if result.outcome == CancelOutcome.NOT_FOUND:
        raise HTTPException(status_code=404, detail="Reservation not found")
    return CancellationResponse(
        outcome=result.outcome.value,
        reservation=_reservation_to_response(result.reservation)
    )

@app.post("/api/admin/save", tags=["Admin"])
async def save_snapshot(
    context: HotelContext = Depends(get_hotel_context),
    current_user: StaffUser = Depends(get_current_active_user)
):
    """Write the current catalog and ledger to storage"""
    try:
        context.save()
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return {"success": True, "message": "Data saved"}

# ============================================================================
# HELPERS
# ============================================================================

def _room_to_response(room: Room) -> RoomResponse:
    """Convert Room entity to RoomResponse"""
    return RoomResponse(
        id=room.id,
        type=room.type.value,
        price_per_night=room.price_per_night,
        capacity=room.capacity
    )

def _reservation_to_response(reservation: Reservation) -> ReservationResponse:
    """Convert Reservation entity to ReservationResponse"""
    return ReservationResponse(
        reservation_id=reservation.reservation_id,
        guest_name=reservation.guest_name,
        guest_phone=reservation.guest_phone,
        room_id=reservation.room.id,
        room_type=reservation.room.type.value,
        check_in=reservation.check_in,
        check_out=reservation.check_out,
        nights=reservation.get_nights(),
        total_price=reservation.total_price,
        payment_method=reservation.payment_method,
        status=reservation.status.value,
        cancelled=reservation.cancelled,
        created_at=reservation.created_at
    )

def run() -> None:
    """Serve the API with uvicorn"""
    import uvicorn
    configure_logging(get_settings())
    uvicorn.run(app, host="0.0.0.0", port=8000)

if __name__ == "__main__":
    run()
