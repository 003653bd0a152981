import pytest

import airline
from database_service import DatabaseService
from models import Seat, SeatStatus


@pytest.fixture
def run(db_path, monkeypatch):
    # keep loguru sinks untouched between tests
    monkeypatch.setattr(airline, 'setup_logging', lambda: None)

    def _run(*argv):
        return airline.main(['--db-file', db_path, *argv])

    return _run


def test_flights_lists_defaults(run, capsys):
    assert run('flights') == 0

    out = capsys.readouterr().out
    assert 'flight_id=F001  flight_number=NU100' in out
    assert 'seats=16  booked=0' in out


def test_book_persists(run, db_path, capsys):
    assert run('book', 'F001', '2c', 'John', 'Doe', '1990-01-01') == 0
    assert 'SEAT BOOKED' in capsys.readouterr().out

    seat = DatabaseService(db_path).get_flight('F001').get_seat('2C')
    assert seat.status == SeatStatus.BOOKED
    assert seat.passenger.full_name() == 'John Doe'

    assert run('release', 'F001', '2C') == 0
    assert DatabaseService(db_path).get_flight('F001').get_seat('2C').passenger is None


def test_book_unknown_seat_fails(run, capsys):
    assert run('book', 'F001', '99Z', 'John', 'Doe', '1990-01-01') == 1
    assert 'No seat 99Z' in capsys.readouterr().err


def test_add_and_delete_flight(run, db_path):
    assert run('add-flight', 'T100', 'NU500', '1', '2', 'AB') == 0
    assert len(DatabaseService(db_path).get_seats('T100')) == 4

    assert run('add-flight', 'T100', 'NU500', '1', '2', 'AB') == 1

    assert run('delete-flight', 'T100') == 0
    assert DatabaseService(db_path).get_flight('T100') is None
    assert run('delete-flight', 'T100') == 1


def test_seats_grid(run, capsys):
    run('book', 'F002', '1B', 'Ana', 'Lee', '2001-02-03')
    capsys.readouterr()

    assert run('seats', 'F002') == 0

    out = capsys.readouterr().out
    assert 'Row  A   B   C   D' in out
    assert '  1  O   X   O   O' in out
    assert 'Legend: O=AVAILABLE, X=BOOKED' in out


def test_seats_unknown_flight(run, capsys):
    assert run('seats', 'NOPE') == 2
    assert 'ERROR: Unknown flight_id: NOPE' in capsys.readouterr().err


def test_format_seat_grid_leaves_gaps():
    seats = [Seat('1A'), Seat('1C'), Seat('2B')]

    lines = airline.format_seat_grid(seats).splitlines()

    assert lines[0] == 'Row  A   B   C'
    assert lines[2] == '  1  O       O'
    assert lines[3] == '  2      O    '


def test_book_rejects_comma_in_name(run, db_path, capsys):
    assert run('book', 'F001', '1A', 'Doe, John', 'Doe', '1990-01-01') == 2
    assert 'ERROR: passenger fields cannot contain commas' in capsys.readouterr().err

    assert DatabaseService(db_path).get_flight('F001').get_seat('1A').passenger is None


def test_add_flight_with_padded_id(run, db_path, capsys):
    assert run('add-flight', ' T200 ', 'NU600', '1', '1', 'AB') == 0
    assert 'flight_id=T200' in capsys.readouterr().out

    assert [f.id for f in DatabaseService(db_path).get_flights()] == ['F001', 'F002', 'T200']
