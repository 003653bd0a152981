#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from typing import Dict, List, Tuple

from config import settings
from database_service import DatabaseService
from file_storage import is_storable
from logger_config import setup_logging
from models import Flight, Passenger, Seat, SeatStatus, seat_sort_key


# ---------------------------
# Formatting
# ---------------------------

def format_seat_grid(seats: List[Seat]) -> str:
    # One line per row; letters taken from the seats themselves
    rows: Dict[int, Dict[str, SeatStatus]] = {}
    letters: List[str] = []
    for seat in seats:
        row, letter = seat_sort_key(seat.seat_number)
        rows.setdefault(row, {})[letter] = seat.status
        if letter not in letters:
            letters.append(letter)
    letters.sort()

    def sym(st: SeatStatus) -> str:
        return {"AVAILABLE": "O", "BOOKED": "X"}[st.value]

    out: List[str] = []
    out.append("Row  " + "   ".join(letters))
    out.append("-" * (5 + 4 * len(letters)))
    for row in sorted(rows):
        cells = [sym(rows[row][l]) if l in rows[row] else " " for l in letters]
        out.append(f"{row:>3}  " + "   ".join(cells))
    out.append("")
    out.append("Legend: O=AVAILABLE, X=BOOKED")
    return "\n".join(out)


def print_flights(flights: Tuple[Flight, ...]) -> None:
    if not flights:
        print("No flights found.")
        return

    for f in flights:
        booked = len(f.seats) - len(f.available_seats())
        print(f"- flight_id={f.id}  flight_number={f.flight_number}")
        print(f"  seats={len(f.seats)}  booked={booked}")
        print("")


# ---------------------------
# Commands
# ---------------------------

def cmd_flights(args: argparse.Namespace, db: DatabaseService) -> int:
    print_flights(db.get_flights())
    return 0


def cmd_seats(args: argparse.Namespace, db: DatabaseService) -> int:
    flight = db.get_flight(args.flight_id)
    if flight is None:
        raise ValueError(f"Unknown flight_id: {args.flight_id}")
    print(f"Flight: {flight.id} ({flight.flight_number})")
    print(format_seat_grid(flight.seats))
    return 0


def cmd_book(args: argparse.Namespace, db: DatabaseService) -> int:
    passenger = Passenger(args.first_name.strip(), args.last_name.strip(), args.date_of_birth.strip())
    if not all(is_storable(v) for v in (passenger.first_name, passenger.last_name, passenger.date_of_birth)):
        raise ValueError("passenger fields cannot contain commas or line breaks")
    if not db.book_seat(args.flight_id, args.seat, passenger):
        print(f"No seat {args.seat} on flight {args.flight_id}", file=sys.stderr)
        return 1
    print("SEAT BOOKED")
    print(f"flight_id={args.flight_id}")
    print(f"seat={args.seat.upper()}")
    print(f"passenger={passenger.full_name()}")
    return 0


def cmd_release(args: argparse.Namespace, db: DatabaseService) -> int:
    if not db.release_seat(args.flight_id, args.seat):
        print(f"No seat {args.seat} on flight {args.flight_id}", file=sys.stderr)
        return 1
    print("SEAT RELEASED")
    print(f"flight_id={args.flight_id}")
    print(f"seat={args.seat.upper()}")
    return 0


def cmd_add_flight(args: argparse.Namespace, db: DatabaseService) -> int:
    if not db.add_flight(args.flight_id, args.flight_number, args.start_row, args.end_row, list(args.letters)):
        print("Flight not added: invalid parameters or duplicate flight_id", file=sys.stderr)
        return 1
    flight = db.get_flight(args.flight_id.strip())
    print("FLIGHT ADDED")
    print(f"flight_id={flight.id}")
    print(f"flight_number={flight.flight_number}")
    print(f"seats={len(flight.seats)}")
    return 0


def cmd_delete_flight(args: argparse.Namespace, db: DatabaseService) -> int:
    if not db.delete_flight(args.flight_id):
        print(f"Unknown flight_id: {args.flight_id}", file=sys.stderr)
        return 1
    print("FLIGHT DELETED")
    print(f"flight_id={args.flight_id}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="airline", description="Airline seat inventory CLI")
    parser.add_argument(
        "--db-file",
        default=settings.DB_PATH,
        help=f"Path to the flight database file (default: {settings.DB_PATH})",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_flights = sub.add_parser("flights", help="List flights")
    p_flights.set_defaults(func=cmd_flights, mutates=False)

    p_seats = sub.add_parser("seats", help="View seat map for a flight")
    p_seats.add_argument("flight_id")
    p_seats.set_defaults(func=cmd_seats, mutates=False)

    p_book = sub.add_parser("book", help="Book a seat for a passenger")
    p_book.add_argument("flight_id")
    p_book.add_argument("seat", help="Seat number, e.g. 12A")
    p_book.add_argument("first_name")
    p_book.add_argument("last_name")
    p_book.add_argument("date_of_birth", help="YYYY-MM-DD")
    p_book.set_defaults(func=cmd_book, mutates=True)

    p_release = sub.add_parser("release", help="Release a booked seat")
    p_release.add_argument("flight_id")
    p_release.add_argument("seat")
    p_release.set_defaults(func=cmd_release, mutates=True)

    p_add = sub.add_parser("add-flight", help="Add a flight with a rectangular seat grid")
    p_add.add_argument("flight_id")
    p_add.add_argument("flight_number")
    p_add.add_argument("start_row", type=int)
    p_add.add_argument("end_row", type=int)
    p_add.add_argument("letters", help="Seat letters per row, e.g. ABCDEF")
    p_add.set_defaults(func=cmd_add_flight, mutates=True)

    p_delete = sub.add_parser("delete-flight", help="Delete a flight")
    p_delete.add_argument("flight_id")
    p_delete.set_defaults(func=cmd_delete_flight, mutates=True)

    return parser


def main(argv: List[str]) -> int:
    setup_logging()
    parser = build_parser()
    args = parser.parse_args(argv)

    # load persisted state (or defaults on first run)
    db = DatabaseService(args.db_file)

    try:
        rc = args.func(args, db)
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    if rc == 0 and args.mutates and not db.save():
        print(f"ERROR: could not save {db.path}", file=sys.stderr)
        return 1
    return rc


def run() -> int:
    return main(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(run())
