"""Pure domain values and collaborator ports (no I/O)."""

from mo_kernel.domain.clock import Clock, DeterministicClock, SystemClock, to_y8
from mo_kernel.domain.context import UserContext
from mo_kernel.domain.parameters import InputParameters, LocationKind, OrderHeaderKey
from mo_kernel.domain.ports import (
    LOCKED_FIELDS,
    LockedOrderHeader,
    OrderHeaderStore,
    WarehouseLookup,
    WarehouseLookupResult,
)

__all__ = [
    "Clock",
    "DeterministicClock",
    "InputParameters",
    "LOCKED_FIELDS",
    "LocationKind",
    "LockedOrderHeader",
    "OrderHeaderKey",
    "OrderHeaderStore",
    "SystemClock",
    "UserContext",
    "WarehouseLookup",
    "WarehouseLookupResult",
    "to_y8",
]
