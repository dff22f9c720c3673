"""
Pytest fixtures for the manufacturing-order kernel test suite.

Provides:
- File-backed SQLite engine per test (real, independent connections)
- In-memory store and lookup doubles with real per-key locking
- Deterministic clock and user context
- Captured JSON logs

Environment Variables:
- MO_TEST_POSTGRES_URL: PostgreSQL URL for tests marked ``postgres``.
  Those tests are skipped when it is not set.
"""

import json
import logging
import os
import threading
from collections.abc import Callable
from datetime import datetime, timezone
from io import StringIO
from typing import Any, Generator

import pytest
from sqlalchemy.orm import Session, sessionmaker

from mo_kernel.db.engine import (
    create_tables,
    get_session_factory,
    init_engine_from_url,
    reset_engine,
)
from mo_kernel.domain.clock import DeterministicClock
from mo_kernel.domain.context import UserContext
from mo_kernel.domain.parameters import OrderHeaderKey
from mo_kernel.domain.ports import LockedOrderHeader, WarehouseLookupResult
from mo_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from mo_kernel.models.mo_header import ManufacturingOrderHeader
from mo_kernel.models.warehouse import Warehouse

TEST_COMPANY = 100
TEST_USER = "MOUSER"
TEST_TIME = datetime(2024, 3, 15, 9, 30, 0, tzinfo=timezone.utc)
TEST_DATE_Y8 = 20240315


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "postgres: mark test as requiring PostgreSQL"
    )
    config.addinivalue_line(
        "markers", "slow_locks: mark test as potentially waiting for locks"
    )


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture mo_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            ...
            logs = captured_logs()
            assert any(r["message"] == "order_header_updated" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("mo_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Context fixtures
# =============================================================================


@pytest.fixture
def user_context() -> UserContext:
    return UserContext(company=TEST_COMPANY, user=TEST_USER)


@pytest.fixture
def clock() -> DeterministicClock:
    return DeterministicClock(TEST_TIME)


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture
def db_engine(tmp_path):
    """SQLite engine on a per-test database file, tables created."""
    eng = init_engine_from_url(f"sqlite:///{tmp_path / 'mo_kernel.db'}")
    create_tables()
    yield eng
    reset_engine()


@pytest.fixture
def session_factory(db_engine) -> sessionmaker[Session]:
    return get_session_factory()


@pytest.fixture
def session(session_factory) -> Generator[Session, None, None]:
    """Session for seeding and reading back; committed data is shared."""
    sess = session_factory()
    yield sess
    sess.close()


@pytest.fixture
def make_header(session) -> Callable[..., ManufacturingOrderHeader]:
    """Insert and commit a manufacturing-order header."""

    def _make(
        facility: str = "A01",
        product: str = "P1",
        order_number: str = "MO1",
        company: int = TEST_COMPANY,
        documents_printed: int = 0,
        last_modified_date: int = 20240101,
        change_sequence: int = 0,
        changed_by: str = "CREATOR",
    ) -> ManufacturingOrderHeader:
        header = ManufacturingOrderHeader(
            company=company,
            facility=facility,
            product=product,
            order_number=order_number,
            documents_printed=documents_printed,
            last_modified_date=last_modified_date,
            change_sequence=change_sequence,
            changed_by=changed_by,
        )
        session.add(header)
        session.commit()
        return header

    return _make


@pytest.fixture
def make_warehouse(session) -> Callable[..., Warehouse]:
    """Insert and commit a warehouse row."""

    def _make(
        warehouse: str = "W01",
        facility: str = "FAC1",
        company: int = TEST_COMPANY,
        name: str = "Main warehouse",
    ) -> Warehouse:
        row = Warehouse(company=company, warehouse=warehouse, facility=facility, name=name)
        session.add(row)
        session.commit()
        return row

    return _make


@pytest.fixture
def postgres_url() -> str:
    url = os.environ.get("MO_TEST_POSTGRES_URL")
    if not url:
        pytest.skip("MO_TEST_POSTGRES_URL not set")
    return url


# =============================================================================
# In-memory doubles
# =============================================================================


class MemoryOrderHeaderStore:
    """
    Dict-backed OrderHeaderStore with one real lock per key.

    Staged values are applied only after the callback returns, so an
    exception inside the callback leaves the record untouched.
    ``observed`` records the change_sequence seen at each lock grant.
    """

    def __init__(self, *, nowait: bool = False, timeout: float = 5.0) -> None:
        self.records: dict[OrderHeaderKey, dict[str, Any]] = {}
        self.observed: list[int] = []
        self.read_lock_calls = 0
        self._nowait = nowait
        self._timeout = timeout
        self._locks: dict[OrderHeaderKey, threading.Lock] = {}
        self._registry = threading.Lock()

    def add(self, key: OrderHeaderKey, **values: Any) -> dict[str, Any]:
        record = {
            "documents_printed": 0,
            "last_modified_date": 20240101,
            "change_sequence": 0,
            "changed_by": "CREATOR",
        }
        record.update(values)
        self.records[key] = record
        return record

    def lock_for(self, key: OrderHeaderKey) -> threading.Lock:
        with self._registry:
            return self._locks.setdefault(key, threading.Lock())

    def read_lock(
        self,
        key: OrderHeaderKey,
        callback: Callable[[LockedOrderHeader], None],
    ) -> bool:
        self.read_lock_calls += 1
        lock = self.lock_for(key)
        if self._nowait:
            acquired = lock.acquire(blocking=False)
        else:
            acquired = lock.acquire(timeout=self._timeout)
        if not acquired:
            return False
        try:
            record = self.records.get(key)
            if record is None:
                return False
            self.observed.append(record["change_sequence"])
            staged: dict[str, Any] = {}
            callback(LockedOrderHeader(key, record, staged.update))
            record.update(staged)
            return True
        finally:
            lock.release()


class StaticWarehouseLookup:
    """WarehouseLookup with canned facilities and error messages."""

    def __init__(
        self,
        facilities: dict[str, str] | None = None,
        errors: dict[str, str] | None = None,
    ) -> None:
        self.facilities = facilities or {}
        self.errors = errors or {}
        self.calls: list[tuple[int, str, int]] = []

    def lookup_warehouse(
        self, company: int, warehouse: str, max_records: int = 1
    ) -> WarehouseLookupResult:
        self.calls.append((company, warehouse, max_records))
        if warehouse in self.errors:
            return WarehouseLookupResult(error_message=self.errors[warehouse])
        return WarehouseLookupResult(facility=self.facilities.get(warehouse))


@pytest.fixture
def memory_store() -> MemoryOrderHeaderStore:
    return MemoryOrderHeaderStore()


@pytest.fixture
def lookup() -> StaticWarehouseLookup:
    return StaticWarehouseLookup(
        facilities={"W01": "FAC1"},
        errors={"BAD": "Warehouse BAD does not exist"},
    )


@pytest.fixture
def memory_store_factory() -> Callable[..., MemoryOrderHeaderStore]:
    return MemoryOrderHeaderStore


@pytest.fixture
def lookup_factory() -> Callable[..., StaticWarehouseLookup]:
    return StaticWarehouseLookup
