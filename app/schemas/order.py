"""
==============================================================================
Order Schemas Module
==============================================================================

Request and response schemas for order placement and order history.

==============================================================================
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from app.repositories.pagination import Page
from app.schemas.common import MessageResponse


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class OrderItemRequest(BaseModel):
    """One requested line: which item and how many."""
    item_id: int = Field(..., gt=0)
    count: int = Field(..., gt=0)


class OrderRequest(BaseModel):
    """Order placement payload, lines kept in the order given."""
    order_items: List[OrderItemRequest] = Field(..., min_length=1)


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class OrderPlacedResponse(MessageResponse):
    """Acknowledgement of a placed order."""
    order_id: int


class OrderItemResponse(BaseModel):
    """Snapshot line item with its derived unit price."""
    item_name: str
    quantity: int
    item_price: int
    total_price: int
    item_image_url: Optional[str] = None


class OrderResponse(BaseModel):
    order_id: int
    order_items: List[OrderItemResponse]
    total_price: int
    created_at: Optional[datetime] = None


class PageableInfo(BaseModel):
    page_number: int
    page_size: int
    offset: int


class OrderPageResponse(BaseModel):
    """
    One page of a member's orders.

    ``total_order_price`` always covers every order of the member, not just
    the orders on this page.
    """
    content: List[OrderResponse]
    total_order_price: int
    pageable: Optional[PageableInfo] = None
    last: bool
    total_pages: int
    total_elements: int
    size: int
    number: int
    first: bool
    number_of_elements: int
    empty: bool

    @classmethod
    def single_page(
        cls,
        content: List[OrderResponse],
        total_order_price: int
    ) -> "OrderPageResponse":
        """Describe an unpaged result as page 0 of exactly one page."""
        count = len(content)
        return cls(
            content=content,
            total_order_price=total_order_price,
            pageable=None,
            last=True,
            total_pages=1,
            total_elements=count,
            size=count,
            number=0,
            first=True,
            number_of_elements=count,
            empty=count == 0,
        )

    @classmethod
    def from_page(
        cls,
        page: Page,
        content: List[OrderResponse],
        total_order_price: int
    ) -> "OrderPageResponse":
        """Copy pagination metadata from a repository page."""
        return cls(
            content=content,
            total_order_price=total_order_price,
            pageable=PageableInfo(**page.page_request.to_dict()),
            last=page.is_last,
            total_pages=page.total_pages,
            total_elements=page.total_elements,
            size=page.size,
            number=page.number,
            first=page.is_first,
            number_of_elements=page.number_of_elements,
            empty=page.is_empty,
        )
