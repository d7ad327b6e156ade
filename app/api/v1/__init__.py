"""
==============================================================================
API v1 Endpoints
==============================================================================

Version 1 of the REST API.

Routers:
--------
- health: Health check endpoints
- auth: Member login
- tokens: Token validation and refresh
- orders: Order placement and history

==============================================================================
"""

from . import health, auth, tokens, orders

__all__ = ["health", "auth", "tokens", "orders"]
