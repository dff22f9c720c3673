"""
SqlWarehouseLookup -- warehouse to facility lookup over the warehouses table.

Implements the ``WarehouseLookup`` port.  Errors are reported in the
result's ``error_message`` rather than raised, the way the external
lookup reports them; the resolver decides what to do with them.
"""

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from mo_kernel.domain.ports import WarehouseLookupResult
from mo_kernel.logging_config import get_logger
from mo_kernel.models.warehouse import Warehouse

logger = get_logger("selectors.warehouse")


class SqlWarehouseLookup:
    """Read-only warehouse lookup; one short-lived session per call."""

    def __init__(self, session_factory: sessionmaker[Session]):
        self._session_factory = session_factory

    def lookup_warehouse(
        self, company: int, warehouse: str, max_records: int = 1
    ) -> WarehouseLookupResult:
        stmt = (
            select(Warehouse.facility)
            .where(Warehouse.company == company, Warehouse.warehouse == warehouse)
            .limit(max_records)
        )
        try:
            with self._session_factory() as session:
                facilities = list(session.execute(stmt).scalars())
        except SQLAlchemyError as exc:
            logger.warning(
                "warehouse_lookup_failed",
                extra={"company": company, "warehouse": warehouse},
                exc_info=True,
            )
            return WarehouseLookupResult(
                error_message=str(getattr(exc, "orig", None) or exc)
            )

        if not facilities:
            return WarehouseLookupResult(
                error_message=f"Warehouse {warehouse} does not exist"
            )

        facility = (facilities[0] or "").strip()
        return WarehouseLookupResult(facility=facility or None)
