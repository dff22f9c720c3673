"""
Module: mo_kernel.models.warehouse
Responsibility: ORM persistence for warehouses (MITWHL).  A warehouse
    belongs to exactly one facility; the warehouse lookup reads this table.
Architecture position: Kernel > Models.  May import from db/base.py only.
"""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from mo_kernel.db.base import Base


class Warehouse(Base):
    """A logical storage location resolving to one facility."""

    __tablename__ = "warehouses"

    __table_args__ = (
        UniqueConstraint("company", "warehouse", name="uq_warehouse_code"),
    )

    company: Mapped[int] = mapped_column(nullable=False)

    warehouse: Mapped[str] = mapped_column(String(10), nullable=False)

    facility: Mapped[str] = mapped_column(String(10), nullable=False)

    name: Mapped[str] = mapped_column(String(60), nullable=False, default="")

    def __repr__(self) -> str:
        return f"<Warehouse {self.company}/{self.warehouse} -> {self.facility}>"
