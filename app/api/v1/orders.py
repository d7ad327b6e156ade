"""
==============================================================================
Order Endpoints
==============================================================================

Order placement (from cart or immediate) and order history for the
authenticated member.

==============================================================================
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.db.models import Member
from app.core.dependencies import get_current_member, get_page_request
from app.repositories.pagination import PageRequest
from app.services.order_service import OrderService
from app.schemas.order import OrderPageResponse, OrderPlacedResponse, OrderRequest


router = APIRouter(prefix="/orders", tags=["Orders"])


class OrderController:
    """Controller for order operations."""

    def __init__(self, db: Session):
        self._service = OrderService(db)

    def order_from_cart(self, member: Member, request: OrderRequest) -> OrderPlacedResponse:
        result = self._service.process_order(member.id, request.order_items)
        order = result.unwrap()
        return OrderPlacedResponse(message="Order placed from cart", order_id=order.id)

    def order_now(self, member: Member, request: OrderRequest) -> OrderPlacedResponse:
        result = self._service.save_order(member.id, request)
        order = result.unwrap()
        return OrderPlacedResponse(message="Order placed", order_id=order.id)

    def list_all(self, member: Member) -> OrderPageResponse:
        return self._service.get_orders_by_member(member.id)

    def list_page(self, member: Member, page_request: PageRequest) -> OrderPageResponse:
        return self._service.get_orders_by_member_paged(
            member.id,
            page_request.page,
            page_request.size
        )


@router.post("/cart", response_model=OrderPlacedResponse)
async def order_from_cart(
    request: OrderRequest,
    member: Member = Depends(get_current_member),
    db: Session = Depends(get_db)
):
    """Place an order for items in the member's cart and clear them from it."""
    controller = OrderController(db)
    return controller.order_from_cart(member, request)


@router.post("", response_model=OrderPlacedResponse)
async def order_now(
    request: OrderRequest,
    member: Member = Depends(get_current_member),
    db: Session = Depends(get_db)
):
    """Place an immediate order without touching the cart."""
    controller = OrderController(db)
    return controller.order_now(member, request)


@router.get("/all", response_model=OrderPageResponse)
async def list_all_orders(
    member: Member = Depends(get_current_member),
    db: Session = Depends(get_db)
):
    """Every order of the member as a single page."""
    controller = OrderController(db)
    return controller.list_all(member)


@router.get("", response_model=OrderPageResponse)
async def list_orders(
    page_request: PageRequest = Depends(get_page_request),
    member: Member = Depends(get_current_member),
    db: Session = Depends(get_db)
):
    """One page of the member's orders, newest first."""
    controller = OrderController(db)
    return controller.list_page(member, page_request)
