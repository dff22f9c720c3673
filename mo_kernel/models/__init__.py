"""ORM models for the manufacturing-order kernel."""

from mo_kernel.models.mo_header import ManufacturingOrderHeader
from mo_kernel.models.warehouse import Warehouse

__all__ = [
    "ManufacturingOrderHeader",
    "Warehouse",
]
