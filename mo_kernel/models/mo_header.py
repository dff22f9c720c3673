"""
Module: mo_kernel.models.mo_header
Responsibility: ORM persistence for manufacturing-order headers (MWOHED).
    Only the columns the documents-printed transaction reads or writes are
    mapped, plus the unique business key.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - (company, facility, product, order_number) is unique
      (uq_mo_header_key).  The locked read relies on this to lock at most
      one row.
    - change_sequence only ever increases; every committed change adds 1.

Failure modes:
    - IntegrityError on duplicate business key.
"""

from sqlalchemy import Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from mo_kernel.db.base import Base


class ManufacturingOrderHeader(Base):
    """
    Header record of a manufacturing order.

    Contract:
        Rows are created and deleted by the order lifecycle outside this
        kernel.  The documents-printed transaction only mutates
        documents_printed and the change metadata of an existing row.

    Guarantees:
        - last_modified_date is an 8-digit YYYYMMDD integer.
        - changed_by holds the user id of the last committed change.
    """

    __tablename__ = "mo_headers"

    __table_args__ = (
        UniqueConstraint(
            "company", "facility", "product", "order_number",
            name="uq_mo_header_key",
        ),
        Index("idx_mo_header_order_number", "company", "order_number"),
    )

    company: Mapped[int] = mapped_column(nullable=False)

    facility: Mapped[str] = mapped_column(String(10), nullable=False)

    product: Mapped[str] = mapped_column(String(30), nullable=False)

    order_number: Mapped[str] = mapped_column(String(20), nullable=False)

    # 0 = order documents not printed, 1 = printed
    documents_printed: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    last_modified_date: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    change_sequence: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    changed_by: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        default="",
    )

    def __repr__(self) -> str:
        return (
            f"<ManufacturingOrderHeader {self.company}/{self.facility}/"
            f"{self.product}/{self.order_number} seq={self.change_sequence}>"
        )
