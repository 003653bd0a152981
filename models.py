"""
Domain model for the flight seat inventory: passengers, seats and flights.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple


# ---------------------------
# Enums / Data Model
# ---------------------------

class SeatStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    BOOKED = "BOOKED"


@dataclass(frozen=True)
class Passenger:
    first_name: str
    last_name: str
    date_of_birth: str  # "YYYY-MM-DD", stored as given

    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass
class Seat:
    """
    A single seat. The seat number keeps the casing it was created with;
    comparisons go through `key`, which is upper-cased.
    """
    seat_number: str
    passenger: Optional[Passenger] = None
    status: SeatStatus = field(init=False)

    def __post_init__(self) -> None:
        if self.seat_number is None or not self.seat_number.strip():
            raise ValueError("seatNumber cannot be null/blank")
        self.status = SeatStatus.BOOKED if self.passenger is not None else SeatStatus.AVAILABLE

    @property
    def key(self) -> str:
        return normalize_seat(self.seat_number)

    @property
    def is_available(self) -> bool:
        return self.status == SeatStatus.AVAILABLE

    def book(self, passenger: Passenger) -> None:
        if passenger is None:
            raise ValueError("passenger cannot be null")
        self.passenger = passenger
        self.status = SeatStatus.BOOKED

    def release(self) -> None:
        self.passenger = None
        self.status = SeatStatus.AVAILABLE


def _require_text(value: Optional[str], name: str) -> str:
    if value is None or not value.strip():
        raise ValueError(f"{name} cannot be null/blank")
    return value


class Flight:
    """
    A flight and its ordered seats.

    Identity is the `id` alone: two flights with the same id compare equal
    and hash the same whatever their flight numbers or seats. The id cannot
    be reassigned; `flight_number` can, but never to a blank value.
    """

    def __init__(
        self,
        id: str,
        flight_number: str,
        seats: Optional[Iterable[Seat]] = None,
    ) -> None:
        self._id = _require_text(id, "id")
        self.flight_number = flight_number
        self.seats: List[Seat] = []
        for seat in seats or ():
            self.add_seat(seat)

    @property
    def id(self) -> str:
        return self._id

    @property
    def flight_number(self) -> str:
        return self._flight_number

    @flight_number.setter
    def flight_number(self, value: str) -> None:
        self._flight_number = _require_text(value, "flightNumber")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Flight):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Flight(id={self.id!r}, flight_number={self.flight_number!r}, seats={len(self.seats)})"

    def add_seat(self, seat: Optional[Seat]) -> None:
        if seat is None:
            return
        self.seats.append(seat)

    def remove_seat(self, seat: Optional[Seat]) -> bool:
        if seat is None or seat not in self.seats:
            return False
        self.seats.remove(seat)
        return True

    def get_seat(self, seat_number: Optional[str]) -> Optional[Seat]:
        if seat_number is None:
            return None
        wanted = normalize_seat(seat_number)
        for seat in self.seats:
            if seat.key == wanted:
                return seat
        return None

    def available_seats(self) -> List[Seat]:
        return [s for s in self.seats if s.is_available]


# ---------------------------
# Seat Helpers
# ---------------------------

def build_seat_grid(start_row: int, end_row: int, letters: Sequence[str]) -> List[Seat]:
    # "1A", "1B", ..., "2A", ...: row-major, then letter order as given
    return [Seat(f"{row}{letter}") for row in range(start_row, end_row + 1) for letter in letters]


def normalize_seat(seat: str) -> str:
    return seat.strip().upper()


def seat_sort_key(seat: str) -> Tuple[int, str]:
    # "14A" -> (14, "A")
    num = ""
    letter = ""
    for ch in normalize_seat(seat):
        if ch.isdigit() and not letter:
            num += ch
        else:
            letter += ch
    return (int(num) if num else 0, letter)
