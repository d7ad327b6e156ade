"""
==============================================================================
FastAPI Dependencies Module
==============================================================================

Dependency injection for member authentication and order pagination.

Dependency Hierarchy:
--------------------
                    ┌─────────────────┐
                    │    get_db()     │
                    └────────┬────────┘
                             │
                    ┌────────▼────────┐
                    │get_current_member│
                    └─────────────────┘

Usage Examples:
--------------
    @router.get("/orders")
    async def list_orders(member: Member = Depends(get_current_member)):
        ...

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.config import get_settings
from app.db.database import get_db
from app.db.models import Member
from app.core import exceptions
from app.core.security import SecurityManager, get_security_manager
from app.repositories.pagination import PageRequest


# Module logger
logger = logging.getLogger(__name__)

# HTTP Bearer security scheme for Swagger UI
security_scheme = HTTPBearer(auto_error=False)

_settings = get_settings()


class AuthenticationManager:
    """
    Resolves the member behind a bearer access token.

    Example:
        >>> auth = AuthenticationManager(security_manager, db_session)
        >>> member = await auth.get_current_member(credentials)
    """

    def __init__(self, security: SecurityManager, db: Session) -> None:
        self._security = security
        self._db = db

    def extract_token_from_header(
        self,
        credentials: Optional[HTTPAuthorizationCredentials]
    ) -> str:
        """
        Extract JWT token from HTTP Authorization header.

        Raises:
            AppException: TOKEN_INVALID if no credentials provided
        """
        if not credentials:
            logger.debug("No authorization credentials provided")
            raise exceptions.token_invalid()

        return credentials.credentials

    async def authenticate_from_token(self, token: str) -> Member:
        """
        Authenticate a member from an access token.

        This method:
        1. Verifies the token signature, expiration and type
        2. Reads the member id from the payload
        3. Loads the member from the database

        Raises:
            AppException: TOKEN_EXPIRED, TOKEN_INVALID or MEMBER_NOT_FOUND
        """
        payload = self._security.verify_token(token, SecurityManager.TOKEN_TYPE_ACCESS)

        if not payload:
            logger.debug("Token verification failed")
            raise exceptions.token_expired()

        member_id = payload.get("member_id")

        if member_id is None:
            logger.warning("Token payload missing 'member_id' claim")
            raise exceptions.token_invalid()

        member = self._db.query(Member).filter(Member.id == member_id).first()

        if not member:
            logger.warning(f"Member not found for token: {member_id}")
            raise exceptions.member_not_found(member_id)

        return member

    async def get_current_member(
        self,
        credentials: Optional[HTTPAuthorizationCredentials]
    ) -> Member:
        token = self.extract_token_from_header(credentials)
        return await self.authenticate_from_token(token)


# =============================================================================
# FASTAPI DEPENDENCY FUNCTIONS
# =============================================================================

async def get_current_member(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
    db: Session = Depends(get_db)
) -> Member:
    """
    FastAPI dependency returning the authenticated member.

    Raises:
        AppException: If authentication fails
    """
    auth_manager = AuthenticationManager(get_security_manager(), db)
    return await auth_manager.get_current_member(credentials)


def get_page_request(
    page: int = Query(0, ge=0, description="Zero-based page index"),
    size: int = Query(
        _settings.default_page_size,
        ge=1,
        le=_settings.max_page_size,
        description="Orders per page"
    )
) -> PageRequest:
    """FastAPI dependency for zero-based order pagination."""
    return PageRequest(page=page, size=size)
