"""Interactive front-desk console.

Prompts collect parsed values and hand them to the application services;
results come back as domain objects and are formatted here.
"""
import re
import sys
from datetime import date
from typing import Callable

from application.context import HotelContext
from application.services import AvailabilityService, BookingService, CancellationService, ReservationService
from domain.entities import Room, Reservation
from domain.enums import RoomType, CancelOutcome
from domain.exceptions import DomainException, PersistenceError
from infrastructure.bootstrap import create_context
from infrastructure.config import get_settings, configure_logging

MENU = """========== HOTEL RESERVATION SYSTEM ==========
1. Search Available Rooms
2. Make a Reservation
3. Cancel a Reservation
4. View Reservation Details
5. List All Reservations
6. List All Rooms
7. Save & Exit
=============================================="""

EXIT_CHOICE = 7

ROOM_TYPE_CHOICES = {1: RoomType.STANDARD, 2: RoomType.DELUXE, 3: RoomType.SUITE}

# yyyy-MM-dd only
DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")
INVALID_DATE_MESSAGE = "Invalid date format. Please use yyyy-MM-dd."


def format_room(room: Room) -> str:
    return (f"ID: {room.id} | Type: {room.type.value} | Price/Night: {room.price_per_night} "
            f"| Capacity: {room.capacity}")


def format_reservation(reservation: Reservation) -> str:
    return (f"Reservation {reservation.reservation_id} | Guest: {reservation.guest_name} "
            f"({reservation.guest_phone or '-'}) | Room: {reservation.room.id} ({reservation.room.type.value}) "
            f"| {reservation.check_in} -> {reservation.check_out} | Total: {reservation.total_price} "
            f"| Payment: {reservation.payment_method or '-'} | Status: {reservation.status.value}")


class ConsoleShell:
    """Menu loop over one HotelContext"""

    def __init__(self,
                 context: HotelContext,
                 input_func: Callable[[str], str] = input,
                 output: Callable[[str], None] = print):
        self.context = context
        self.availability = AvailabilityService(context)
        self.booking = BookingService(context, self.availability)
        self.cancellation = CancellationService(context)
        self.reservations = ReservationService(context)
        self._input = input_func
        self._output = output
        self._actions = {
            1: self.search_available_rooms,
            2: self.make_reservation,
            3: self.cancel_reservation,
            4: self.view_reservation_details,
            5: self.list_all_reservations,
            6: self.list_all_rooms,
        }

    def run(self) -> None:
        while True:
            self._output(MENU)
            try:
                choice = self.read_int("Enter your choice: ")
            except EOFError:
                choice = EXIT_CHOICE

            if choice == EXIT_CHOICE:
                self.save_and_exit()
                return

            action = self._actions.get(choice)
            if action is None:
                self._output("Invalid choice. Please try again.")
            else:
                try:
                    action()
                except DomainException as e:
                    self._output(f"Error: {e}")
                except EOFError:
                    self.save_and_exit()
                    return
            self._output("")

    # ==================== MENU ACTIONS ====================
    def search_available_rooms(self) -> None:
        self._output("---- Search Available Rooms ----")
        room_type = self.read_room_type()
        check_in = self.read_date("Enter check-in date (yyyy-MM-dd): ")
        check_out = self.read_date("Enter check-out date (yyyy-MM-dd): ")

        rooms = self.availability.search(room_type, check_in, check_out)
        if not rooms:
            self._output("No available rooms found for given type and dates.")
            return
        self._output("Available rooms:")
        for room in rooms:
            self._output(format_room(room))

    def make_reservation(self) -> None:
        self._output("---- Make a Reservation ----")
        name = self.read_text("Enter guest name: ")
        if not name:
            self._output("Name cannot be empty.")
            return
        phone = self.read_text("Enter guest phone: ")
        room_type = self.read_room_type()
        check_in = self.read_date("Enter check-in date (yyyy-MM-dd): ")
        check_out = self.read_date("Enter check-out date (yyyy-MM-dd): ")

        rooms = self.availability.search(room_type, check_in, check_out)
        if not rooms:
            self._output("No available rooms for selected type and dates.")
            return
        self._output(f"Available rooms of type {room_type.value}:")
        for room in rooms:
            self._output(format_room(room))

        room_id = self.read_int("Enter room ID to book: ")
        selected = next((r for r in rooms if r.id == room_id), None)
        if selected is None:
            self._output("Invalid room ID or room not available.")
            return

        self._output("---- Payment Simulation ----")
        self._output(f"Total amount: {selected.price_for((check_out - check_in).days)}")
        payment_method = self.read_text("Enter payment method (Card/UPI/Cash): ")
        txn_ref = self.read_text("Enter dummy transaction reference (anything): ")

        reservation = self.booking.book(
            guest_name=name,
            guest_phone=phone,
            room_type=room_type,
            check_in=check_in,
            check_out=check_out,
            room_id=room_id,
            payment_method=payment_method,
            txn_ref=txn_ref
        )
        self._output("Reservation successful!")
        self._output(f"Your Reservation ID: {reservation.reservation_id}")

    def cancel_reservation(self) -> None:
        self._output("---- Cancel Reservation ----")
        reservation_id = self.read_text("Enter Reservation ID: ")
        reservation = self.reservations.get_reservation(reservation_id)
        if reservation is None:
            self._output("Reservation not found.")
            return
        if reservation.cancelled:
            self._output("Reservation is already cancelled.")
            return

        self._output("Found reservation:")
        self._output(format_reservation(reservation))
        answer = self.read_text("Are you sure you want to cancel? (y/n): ").lower()
        if answer not in ("y", "yes"):
            self._output("Cancellation aborted.")
            return

        result = self.cancellation.cancel(reservation_id)
        if result.outcome == CancelOutcome.CANCELLED:
            self._output("Reservation cancelled successfully.")
        elif result.outcome == CancelOutcome.ALREADY_CANCELLED:
            self._output("Reservation is already cancelled.")
        else:
            self._output("Reservation not found.")

    def view_reservation_details(self) -> None:
        self._output("---- View Reservation Details ----")
        reservation = self.reservations.get_reservation(self.read_text("Enter Reservation ID: "))
        if reservation is None:
            self._output("Reservation not found.")
            return
        self._output("Reservation details:")
        self._output(format_reservation(reservation))

    def list_all_reservations(self) -> None:
        self._output("---- All Reservations ----")
        reservations = self.reservations.get_all_reservations()
        if not reservations:
            self._output("No reservations found.")
            return
        for reservation in reservations:
            self._output(format_reservation(reservation))

    def list_all_rooms(self) -> None:
        self._output("---- All Rooms ----")
        for room in self.reservations.get_all_rooms():
            self._output(format_room(room))

    def save_and_exit(self) -> None:
        try:
            self.context.save()
        except PersistenceError as e:
            self._output(f"Error saving data: {e}")
            return
        self._output("Data saved. Exiting... Goodbye!")

    # ==================== INPUT HELPERS ====================
    def read_text(self, message: str) -> str:
        return self._input(message).strip()

    def read_int(self, message: str) -> int:
        while True:
            line = self._input(message)
            try:
                return int(line.strip())
            except ValueError:
                self._output("Please enter a valid integer.")

    def read_date(self, message: str) -> date:
        while True:
            line = self._input(message).strip()
            if not DATE_PATTERN.fullmatch(line):
                self._output(INVALID_DATE_MESSAGE)
                continue
            try:
                return date.fromisoformat(line)
            except ValueError:
                self._output(INVALID_DATE_MESSAGE)

    def read_room_type(self) -> RoomType:
        while True:
            self._output("Select room type:")
            for number, choice in ROOM_TYPE_CHOICES.items():
                self._output(f"{number}. {choice.value}")
            room_type = ROOM_TYPE_CHOICES.get(self.read_int("Enter choice: "))
            if room_type is not None:
                return room_type
            self._output("Invalid choice, please try again.")


def main() -> int:
    settings = get_settings()
    configure_logging(settings)
    context = create_context(settings)
    ConsoleShell(context).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
