"""
==============================================================================
Main API Router
==============================================================================

Combines all v1 API routes under /api/v1 prefix.

==============================================================================
"""

from fastapi import APIRouter

from app.api.v1 import health, auth, tokens, orders


class MainAPIRouter:
    """Main API router combining all versioned routes."""

    def __init__(self):
        self._router = APIRouter(prefix="/api/v1")
        self._include_routers()

    def _include_routers(self) -> None:
        self._router.include_router(health.router)
        self._router.include_router(auth.router)
        self._router.include_router(tokens.router)
        self._router.include_router(orders.router)

    @property
    def router(self):
        """Get the FastAPI router instance."""
        return self._router


api_router = MainAPIRouter().router
