"""
In-memory flight database backed by the flat file in file_storage.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from loguru import logger

import file_storage
from config import settings
from models import Flight, Passenger, Seat, build_seat_grid


class DatabaseService:
    def __init__(self, path: Optional[str] = None, max_seats: Optional[int] = None) -> None:
        self._path = path if path and path.strip() else settings.DB_PATH
        self.max_seats = max_seats if max_seats is not None else settings.MAX_SEATS_PER_FLIGHT
        self._flights: List[Flight] = file_storage.read(self._path)

    @property
    def path(self) -> str:
        return self._path

    def get_flights(self) -> Tuple[Flight, ...]:
        """Read-only snapshot of the flights, in load/insertion order."""
        return tuple(self._flights)

    def get_flight(self, flight_id: Optional[str]) -> Optional[Flight]:
        if flight_id is None:
            return None
        for flight in self._flights:
            if flight.id == flight_id:
                return flight
        return None

    def get_seats(self, flight_id: Optional[str]) -> List[Seat]:
        flight = self.get_flight(flight_id)
        return flight.seats if flight is not None else []

    def update_seat(self, flight_id: str, seat_number: str, passenger: Optional[Passenger]) -> bool:
        """
        Book (passenger given) or release (passenger None) a seat.
        Seat numbers match case-insensitively. Returns False when the flight
        or seat does not exist, or when a passenger field would break the
        row layout on disk.
        """
        flight = self.get_flight(flight_id)
        if flight is None:
            return False
        seat = flight.get_seat(seat_number)
        if seat is None:
            return False

        if passenger is not None:
            fields = (passenger.first_name, passenger.last_name, passenger.date_of_birth)
            if not all(file_storage.is_storable(f) for f in fields):
                logger.warning(f"Rejecting booking of {flight_id}/{seat_number}: passenger field holds a delimiter")
                return False
            seat.book(passenger)
        else:
            seat.release()
        return True

    def book_seat(self, flight_id: str, seat_number: str, passenger: Passenger) -> bool:
        if passenger is None:
            return False
        return self.update_seat(flight_id, seat_number, passenger)

    def release_seat(self, flight_id: str, seat_number: str) -> bool:
        return self.update_seat(flight_id, seat_number, None)

    def add_flight(
        self,
        flight_id: Optional[str],
        flight_number: Optional[str],
        start_row: int,
        end_row: int,
        letters: Optional[Sequence[str]],
    ) -> bool:
        if not flight_id or not flight_id.strip():
            return False
        if not flight_number or not flight_number.strip():
            return False
        # the reader trims fields, so padded ids would not survive a reload
        flight_id, flight_number = flight_id.strip(), flight_number.strip()
        if not file_storage.is_storable(flight_id) or not file_storage.is_storable(flight_number):
            return False
        if start_row < 1 or start_row > end_row:
            return False
        if not letters or any(not l.strip() or not file_storage.is_storable(l) for l in letters):
            return False
        seat_count = (end_row - start_row + 1) * len(letters)
        if seat_count > self.max_seats:
            logger.warning(f"Rejecting flight {flight_id}: {seat_count} seats exceeds cap of {self.max_seats}")
            return False
        if self.get_flight(flight_id) is not None:
            return False

        self._flights.append(Flight(flight_id, flight_number, build_seat_grid(start_row, end_row, letters)))
        return True

    def delete_flight(self, flight_id: str) -> bool:
        flight = self.get_flight(flight_id)
        if flight is None:
            return False
        self._flights.remove(flight)
        return True

    def save(self) -> bool:
        try:
            file_storage.write(self._path, self._flights)
            return True
        except OSError as e:
            logger.error(f"Failed to save {self._path}: {e}")
            return False
