"""
==============================================================================
Repositories Package - Data Access Layer
==============================================================================

Thin query wrappers used by the services. Repositories stage changes on the
session they are given and leave committing to the service.

==============================================================================
"""

from .pagination import Page, PageRequest
from .cart_repository import CartRepository
from .order_repository import OrderRepository

__all__ = [
    "Page",
    "PageRequest",
    "CartRepository",
    "OrderRepository",
]
