"""
Flat-file persistence for the flight database.

Each data row has 7 comma-separated columns:

    flightId,flightNumber,seatNumber,status,firstName,lastName,dateOfBirth

Files are always written in the v1 layout (header line first, UTF-8, LF).
On read, legacy files are accepted too: no header or any other `#` header,
CRLF line endings and a leading UTF-8 BOM. Malformed rows are skipped and
logged; a missing, empty or unreadable file yields the default dataset.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Union

from loguru import logger

from models import Flight, Passenger, Seat, SeatStatus, build_seat_grid


V1_HEADER = "# NUA-DB v1 | flightId,flightNumber,seatNumber,status,firstName,lastName,dateOfBirth"
COLUMN_COUNT = 7
DELIMITER = ","


def is_storable(value: str) -> bool:
    """True when `value` can be written as one field without splitting the row."""
    return not any(ch in value for ch in (DELIMITER, "\n", "\r"))


# ---------------------------
# Row parsing
# ---------------------------

@dataclass(frozen=True)
class ParsedRow:
    flight_id: str
    flight_number: str
    seat: Seat


@dataclass(frozen=True)
class SkippedRow:
    reason: str
    raw: str


RowOutcome = Union[ParsedRow, SkippedRow, None]


def parse_line(line: str) -> RowOutcome:
    """
    Parse one line of the file.

    Returns None for lines that carry no data (blank, comment or header),
    a SkippedRow with the reason for malformed rows, or a ParsedRow.
    """
    raw = line.rstrip("\r\n")
    if not raw.strip() or raw.startswith("#"):
        return None

    cols = raw.split(DELIMITER)
    if len(cols) != COLUMN_COUNT:
        return SkippedRow("wrong column count", raw)

    flight_id, flight_number, seat_number, status, first, last, dob = (c.strip() for c in cols)
    status = status.upper()

    if not flight_id or not flight_number or not seat_number:
        return SkippedRow("missing required fields", raw)
    if status not in (SeatStatus.AVAILABLE.value, SeatStatus.BOOKED.value):
        return SkippedRow("invalid status", raw)

    if status == SeatStatus.BOOKED.value:
        seat = Seat(seat_number, Passenger(first, last, dob))
    else:
        seat = Seat(seat_number)
    return ParsedRow(flight_id, flight_number, seat)


def collect_flights(lines: Iterable[str]) -> List[Flight]:
    """Fold parsed rows into flights, keyed by id in first-seen order."""
    flights_by_id: Dict[str, Flight] = {}
    for line in lines:
        outcome = parse_line(line)
        if outcome is None:
            continue
        if isinstance(outcome, SkippedRow):
            logger.warning(f"Skipping malformed row ({outcome.reason}): {outcome.raw}")
            continue
        flight = flights_by_id.get(outcome.flight_id)
        if flight is None:
            # later rows for the same id only contribute seats
            flight = Flight(outcome.flight_id, outcome.flight_number)
            flights_by_id[flight.id] = flight
        flight.add_seat(outcome.seat)
    return list(flights_by_id.values())


# ---------------------------
# Read / Write
# ---------------------------

def read(path: str) -> List[Flight]:
    if not os.path.exists(path):
        logger.info(f"{path} not found. Creating default database...")
        defaults = default_flights()
        _try_write(path, defaults, "Error creating default file")
        return defaults

    try:
        # utf-8-sig drops a BOM at the start of the stream only
        with open(path, "r", encoding="utf-8-sig", newline=None) as f:
            flights = collect_flights(f)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Error reading file, using defaults: {e}")
        return default_flights()

    if not flights:
        logger.warning("File empty or invalid. Rebuilding with defaults.")
        defaults = default_flights()
        _try_write(path, defaults, "Could not rebuild file")
        return defaults

    logger.info(f"Loaded {len(flights)} flights from {path}")
    return flights


def format_row(flight: Flight, seat: Seat) -> str:
    passenger: Optional[Passenger] = seat.passenger
    return DELIMITER.join((
        flight.id,
        flight.flight_number,
        seat.seat_number,
        seat.status.value,
        passenger.first_name if passenger else "",
        passenger.last_name if passenger else "",
        passenger.date_of_birth if passenger else "",
    ))


def write(path: str, flights: Iterable[Flight]) -> None:
    """
    Rewrite `path` in the v1 layout. The file is replaced as a whole via a
    temporary sibling; OSError propagates to the caller.
    """
    flights = list(flights)
    lines = [V1_HEADER]
    for flight in flights:
        lines.extend(format_row(flight, seat) for seat in flight.seats)

    tmp = f"{path}.tmp"
    try:
        with open(tmp, "w", encoding="utf-8", newline="\n") as f:
            f.write("\n".join(lines) + "\n")
        os.replace(tmp, path)
    except OSError:
        if os.path.isfile(tmp):
            os.remove(tmp)
        raise
    logger.info(f"Saved {len(flights)} flights to {path} (v1)")


def _try_write(path: str, flights: List[Flight], message: str) -> None:
    try:
        write(path, flights)
    except OSError as e:
        logger.error(f"{message}: {e}")


# ---------------------------
# Default dataset
# ---------------------------

def default_flights() -> List[Flight]:
    """Two sample flights, every seat available."""
    return [
        Flight("F001", "NU100", build_seat_grid(1, 5, "ABCDEF")),
        Flight("F002", "NU245", build_seat_grid(1, 4, "ABCD")),
    ]
