"""
==============================================================================
Services Package - Business Logic Layer
==============================================================================

Service classes sitting between the API controllers and the data layer.

This package provides:
- AuthService: Member login and token issuing
- TokenService: Token validation and refresh-token reissue
- EntityValidationService: Member/item lookups
- OrderService: Order placement and order history

Architecture Pattern: Service Layer
----------------------------------

    ┌─────────────────┐
    │   API Router    │
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │    Service      │  ← Business Logic, transaction boundary
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │   Repository    │  ← Data Access (via ORM)
    └─────────────────┘

Services receive their session and collaborators through the constructor.

==============================================================================
"""

from .auth_service import AuthService
from .token_service import TokenService
from .entity_validation_service import EntityValidationService
from .order_result import OrderErrorKind, OrderFailure, OrderResult
from .order_service import OrderService

__all__ = [
    "AuthService",
    "TokenService",
    "EntityValidationService",
    "OrderErrorKind",
    "OrderFailure",
    "OrderResult",
    "OrderService",
]
