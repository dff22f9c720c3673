"""
Canonical transaction parameters and the order-header unique key.

Pure value objects.  ``InputParameters`` is what the validator produces;
``OrderHeaderKey`` is what the store locks on.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any


class LocationKind(str, Enum):
    """Which location field the caller supplies."""

    FACILITY = "FACI"  # facility given directly
    WAREHOUSE = "WHLO"  # warehouse, resolved to a facility before update


@dataclass(frozen=True)
class InputParameters:
    """
    Validated, canonical representation of caller input.

    Invariants:
        - ``location``, ``product`` and ``order_number`` are non-empty
          and trimmed.
        - ``documents_printed`` is 0 or 1.
    """

    company: int
    location: str
    location_kind: LocationKind
    product: str
    order_number: str
    documents_printed: int = 0

    @property
    def facility(self) -> str | None:
        """Facility when supplied directly, else None."""
        if self.location_kind is LocationKind.FACILITY:
            return self.location
        return None

    @property
    def warehouse(self) -> str | None:
        """Warehouse when supplied, else None."""
        if self.location_kind is LocationKind.WAREHOUSE:
            return self.location
        return None

    def to_log_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["location_kind"] = self.location_kind.value
        return data


@dataclass(frozen=True)
class OrderHeaderKey:
    """Primary unique key of a manufacturing-order header."""

    company: int
    facility: str
    product: str
    order_number: str

    def __str__(self) -> str:
        return f"{self.company}/{self.facility}/{self.product}/{self.order_number}"
