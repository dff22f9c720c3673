"""
Manufacturing-order kernel

Validated, lock-protected single-record updates of manufacturing-order
headers:
- Input validation into canonical parameters
- Optional warehouse-to-facility resolution
- Read-with-lock, mutate and commit under one row lock
"""

__version__ = "0.1.0"
