"""
==============================================================================
Schemas Package - Pydantic Models
==============================================================================

Request and response schemas using Pydantic for validation.

This package provides:
- Common: Shared response schemas
- Auth: Login schemas
- Token: Token validation/refresh schemas
- Order: Order placement and history schemas

==============================================================================
"""

from .common import MessageResponse
from .auth import LoginRequest, TokenResponse, MemberInfo, CurrentMemberResponse
from .token import TokenValidationResponse, RefreshTokenResponse
from .order import (
    OrderItemRequest,
    OrderRequest,
    OrderPlacedResponse,
    OrderItemResponse,
    OrderResponse,
    OrderPageResponse,
    PageableInfo,
)

__all__ = [
    # Common
    "MessageResponse",
    # Auth
    "LoginRequest",
    "TokenResponse",
    "MemberInfo",
    "CurrentMemberResponse",
    # Token
    "TokenValidationResponse",
    "RefreshTokenResponse",
    # Order
    "OrderItemRequest",
    "OrderRequest",
    "OrderPlacedResponse",
    "OrderItemResponse",
    "OrderResponse",
    "OrderPageResponse",
    "PageableInfo",
]
