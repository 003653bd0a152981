from typing import List

import pytest
from loguru import logger

from database_service import DatabaseService


@pytest.fixture
def log_messages() -> List[str]:
    messages: List[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record['message']), level='DEBUG')
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def db_path(tmp_path) -> str:
    return str(tmp_path / 'test_database.txt')


@pytest.fixture
def db(db_path) -> DatabaseService:
    return DatabaseService(db_path)


@pytest.fixture
def write_file():
    """Write raw lines to a file, joined with the given line ending."""

    def _write(path, lines: List[str], newline: str = '\n', bom: bool = False) -> None:
        data = (newline.join(lines) + newline).encode('utf-8')
        if bom:
            data = b'\xef\xbb\xbf' + data
        with open(path, 'wb') as f:
            f.write(data)

    return _write
