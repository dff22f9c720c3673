"""
OrderHeaderSelector -- unlocked reads of manufacturing-order headers.

Readers without a lock are not blocked by a concurrent locked update and
only ever see committed values.
"""

from dataclasses import dataclass

from sqlalchemy import select

from mo_kernel.domain.parameters import OrderHeaderKey
from mo_kernel.models.mo_header import ManufacturingOrderHeader
from mo_kernel.selectors.base import BaseSelector


@dataclass(frozen=True)
class OrderHeaderInfo:
    """Immutable snapshot of a manufacturing-order header."""

    key: OrderHeaderKey
    documents_printed: int
    last_modified_date: int
    change_sequence: int
    changed_by: str

    @property
    def is_printed(self) -> bool:
        return self.documents_printed == 1


class OrderHeaderSelector(BaseSelector[ManufacturingOrderHeader]):
    """Read-side access to manufacturing-order headers."""

    def get(self, key: OrderHeaderKey) -> OrderHeaderInfo | None:
        """
        Read the header for ``key`` without locking.

        Returns:
            OrderHeaderInfo, or None if no header matches.
        """
        header = self.session.execute(
            select(ManufacturingOrderHeader).where(
                ManufacturingOrderHeader.company == key.company,
                ManufacturingOrderHeader.facility == key.facility,
                ManufacturingOrderHeader.product == key.product,
                ManufacturingOrderHeader.order_number == key.order_number,
            )
        ).scalar_one_or_none()

        if header is None:
            return None

        return OrderHeaderInfo(
            key=key,
            documents_printed=header.documents_printed,
            last_modified_date=header.last_modified_date,
            change_sequence=header.change_sequence,
            changed_by=header.changed_by,
        )

    def list_for_order(self, company: int, order_number: str) -> list[OrderHeaderInfo]:
        """All headers carrying ``order_number`` within ``company``."""
        headers = self.session.execute(
            select(ManufacturingOrderHeader)
            .where(
                ManufacturingOrderHeader.company == company,
                ManufacturingOrderHeader.order_number == order_number,
            )
            .order_by(
                ManufacturingOrderHeader.facility,
                ManufacturingOrderHeader.product,
            )
        ).scalars()

        return [
            OrderHeaderInfo(
                key=OrderHeaderKey(h.company, h.facility, h.product, h.order_number),
                documents_printed=h.documents_printed,
                last_modified_date=h.last_modified_date,
                change_sequence=h.change_sequence,
                changed_by=h.changed_by,
            )
            for h in headers
        ]
