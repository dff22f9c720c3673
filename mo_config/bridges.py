"""
Config -> Kernel Bridges.

Functions that turn a ``TransactionConfig`` into ready kernel objects.
They live in mo_config because the kernel must never import mo_config.

Usage:
    from mo_config import get_active_config
    from mo_config.bridges import build_transaction, init_from_config

    config = get_active_config()
    session_factory = init_from_config(config)
    txn = build_transaction(config, UserContext(company=100, user="JDOE"),
                            session_factory=session_factory)
    result = txn.execute({"FACI": "A01", "PRNO": "P1", "MFNO": "1000123", "WODP": "1"})
"""

from __future__ import annotations

from sqlalchemy.orm import Session, sessionmaker

from mo_config.schema import TransactionConfig
from mo_kernel.db.engine import get_session_factory, init_engine_from_url
from mo_kernel.db.locking import SqlOrderHeaderStore
from mo_kernel.domain.clock import Clock, SystemClock
from mo_kernel.domain.context import UserContext
from mo_kernel.domain.parameters import LocationKind
from mo_kernel.domain.ports import OrderHeaderStore, WarehouseLookup
from mo_kernel.logging_config import configure_logging
from mo_kernel.selectors.warehouse_selector import SqlWarehouseLookup
from mo_kernel.services.documents_printed_transaction import DocumentsPrintedTransaction
from mo_kernel.services.facility_resolver import FacilityResolver
from mo_kernel.services.input_validator import InputValidator
from mo_kernel.services.record_updater import RecordUpdater


def init_from_config(config: TransactionConfig) -> sessionmaker[Session]:
    """Configure logging and the engine; return the session factory."""
    configure_logging(level=config.logging.level)
    db = config.database
    init_engine_from_url(
        db.url,
        echo=db.echo,
        pool_size=db.pool_size,
        max_overflow=db.max_overflow,
        pool_timeout=db.pool_timeout,
    )
    return get_session_factory()


def build_transaction(
    config: TransactionConfig,
    user_context: UserContext,
    *,
    location_kind: LocationKind = LocationKind.FACILITY,
    session_factory: sessionmaker[Session] | None = None,
    store: OrderHeaderStore | None = None,
    lookup: WarehouseLookup | None = None,
    clock: Clock | None = None,
) -> DocumentsPrintedTransaction:
    """
    Wire a ``DocumentsPrintedTransaction`` for one session context.

    ``store`` and ``lookup`` default to the SQL implementations over
    ``session_factory`` (or the initialised engine's factory).
    """
    if store is None or (location_kind is LocationKind.WAREHOUSE and lookup is None):
        session_factory = session_factory or get_session_factory()

    if store is None:
        store = SqlOrderHeaderStore(session_factory, nowait=config.store.lock_nowait)

    resolver = None
    if location_kind is LocationKind.WAREHOUSE:
        resolver = FacilityResolver(
            lookup or SqlWarehouseLookup(session_factory),
            allow_empty=config.resolution.allow_empty_facility,
        )

    return DocumentsPrintedTransaction(
        InputValidator(user_context, location_kind),
        RecordUpdater(store, clock or SystemClock(), user_context),
        resolver,
        user=user_context.user,
    )
