"""
Collaborator ports for the locked update.

Responsibility:
    Declares the interfaces the kernel consumes but does not own: the
    keyed store with its row lock, and the warehouse lookup.  Also
    defines ``LockedOrderHeader``, the view a store hands to the
    mutation callback while the row lock is held.

Architecture position:
    Kernel > Domain.  No I/O.  Implementations live in ``db/`` and
    ``selectors/`` (or in test doubles).

Invariants enforced:
    - Writes made through ``LockedOrderHeader.set`` are staged.  They
      reach the store only through ``update()``, as one batch, so no
      partially written record is visible outside the lock scope.
    - Only the projected fields can be read or written.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from mo_kernel.domain.parameters import OrderHeaderKey

# Non-key fields projected by the locked read
LOCKED_FIELDS: tuple[str, ...] = (
    "documents_printed",
    "last_modified_date",
    "change_sequence",
    "changed_by",
)


class LockedOrderHeader:
    """
    A manufacturing-order header held under an exclusive row lock.

    Contract:
        Created by a store inside its lock scope and passed to the
        mutation callback.  ``set`` stages values; ``update`` hands the
        staged values to the store in one call.  The store commits after
        the callback returns.
    """

    def __init__(
        self,
        key: OrderHeaderKey,
        values: Mapping[str, Any],
        apply: Callable[[dict[str, Any]], None],
    ):
        self.key = key
        self._values = {name: values[name] for name in LOCKED_FIELDS}
        self._staged: dict[str, Any] = {}
        self._apply = apply
        self.updated = False

    def get(self, name: str) -> Any:
        """Current value of a projected field, including staged writes."""
        self._check(name)
        if name in self._staged:
            return self._staged[name]
        return self._values[name]

    def get_int(self, name: str) -> int:
        value = self.get(name)
        return int(value) if value is not None else 0

    def set(self, name: str, value: Any) -> None:
        """Stage a new value for a projected field."""
        self._check(name)
        self._staged[name] = value

    def update(self) -> None:
        """Write all staged values to the locked record."""
        if not self._staged:
            return
        self._apply(dict(self._staged))
        self._values.update(self._staged)
        self._staged.clear()
        self.updated = True

    @staticmethod
    def _check(name: str) -> None:
        if name not in LOCKED_FIELDS:
            raise KeyError(f"Field {name!r} is not part of the locked selection")


class OrderHeaderStore(Protocol):
    """Keyed store exposing a read-with-lock over the header's unique key."""

    def read_lock(
        self,
        key: OrderHeaderKey,
        callback: Callable[[LockedOrderHeader], None],
    ) -> bool:
        """
        Lock the record for ``key``, run ``callback``, commit.

        Returns True only if the record was found, locked, and the
        callback's changes committed.  Returns False when no record
        matches, the lock cannot be obtained, or the store fails.
        The lock is released on every exit path.
        """
        ...


@dataclass(frozen=True)
class WarehouseLookupResult:
    """Outcome of a warehouse lookup: a facility or an error message."""

    facility: str | None = None
    error_message: str | None = None

    @property
    def is_error(self) -> bool:
        return bool(self.error_message)


class WarehouseLookup(Protocol):
    """External lookup that maps a warehouse code to its facility."""

    def lookup_warehouse(
        self, company: int, warehouse: str, max_records: int = 1
    ) -> WarehouseLookupResult:
        """Look up ``warehouse`` for ``company``, returning at most one match."""
        ...
