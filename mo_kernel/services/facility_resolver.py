"""
FacilityResolver -- warehouse code to facility code.

Used only by the warehouse variant of the transaction.  Calls the
external lookup once, capped at one record, and never retries.

Failure modes:
    - ResolutionError carrying the lookup's error message verbatim.
    - ResolutionError when the lookup returns no facility and no message,
      unless ``allow_empty`` restores the legacy pass-through.
"""

from mo_kernel.domain.ports import WarehouseLookup
from mo_kernel.exceptions import ResolutionError
from mo_kernel.logging_config import get_logger

logger = get_logger("services.facility_resolver")


class FacilityResolver:
    """Resolves the facility a warehouse belongs to."""

    def __init__(self, lookup: WarehouseLookup, *, allow_empty: bool = False):
        """
        Args:
            lookup: External warehouse lookup.
            allow_empty: If True, an empty result without an error message
                resolves to an empty facility instead of failing.
        """
        self._lookup = lookup
        self._allow_empty = allow_empty

    def resolve(self, company: int, warehouse: str) -> str:
        """
        Return the facility for ``warehouse``.

        Raises:
            ResolutionError: If the lookup failed or found nothing.
        """
        result = self._lookup.lookup_warehouse(company, warehouse, max_records=1)

        if result.is_error:
            logger.info(
                "warehouse_resolution_failed",
                extra={"warehouse": warehouse, "lookup_message": result.error_message},
            )
            raise ResolutionError(warehouse, result.error_message)

        if not result.facility:
            if self._allow_empty:
                logger.warning(
                    "warehouse_resolved_to_empty_facility",
                    extra={"warehouse": warehouse},
                )
                return ""
            raise ResolutionError(warehouse, f"Warehouse {warehouse} does not exist")

        logger.debug(
            "warehouse_resolved",
            extra={"warehouse": warehouse, "facility": result.facility},
        )
        return result.facility
