"""Selectors for the manufacturing-order kernel (read side)."""

from mo_kernel.selectors.order_header_selector import OrderHeaderInfo, OrderHeaderSelector
from mo_kernel.selectors.warehouse_selector import SqlWarehouseLookup

__all__ = [
    "OrderHeaderInfo",
    "OrderHeaderSelector",
    "SqlWarehouseLookup",
]
