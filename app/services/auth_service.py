"""
==============================================================================
Authentication Service Module
==============================================================================

Member login and token issuing.

Authentication Flow:
-------------------
    ┌─────────────┐
    │   Login     │
    │  Request    │
    └──────┬──────┘
           │
    ┌──────▼──────┐     ┌─────────────┐
    │ Find Member │────▶│  Not Found  │ → INVALID_CREDENTIALS
    └──────┬──────┘     └─────────────┘
           │
    ┌──────▼──────┐     ┌─────────────┐
    │  Verify     │────▶│  Password   │ → INVALID_CREDENTIALS
    │  Password   │     │   Wrong     │
    └──────┬──────┘     └─────────────┘
           │
    ┌──────▼──────┐
    │  Generate   │
    │   Tokens    │
    └─────────────┘

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from app.config import get_settings
from app.db.models import Member
from app.core import exceptions
from app.core.security import SecurityManager, get_security_manager
from app.services.entity_validation_service import EntityValidationService


# Module logger
logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service for member login.

    Attributes:
        _validator: Member lookups
        _security: SecurityManager for crypto operations
        _settings: Application settings

    Example:
        >>> auth_service = AuthService(db_session)
        >>> member, access, refresh = auth_service.authenticate("kim@shop.kr", "pass123")
    """

    def __init__(
        self,
        db: Session,
        security: Optional[SecurityManager] = None
    ) -> None:
        self._validator = EntityValidationService(db)
        self._security = security or get_security_manager()
        self._settings = get_settings()

    def authenticate(self, email: str, password: str) -> Tuple[Member, str, str]:
        """
        Authenticate a member with email and password.

        Args:
            email: Login email (case-insensitive)
            password: Plain text password

        Returns:
            Tuple of (Member, access_token, refresh_token)

        Raises:
            AppException: INVALID_CREDENTIALS if the member is unknown or the
                password is wrong
        """
        member = self._validator.find_member_by_email(email)

        if not member:
            logger.warning(f"Login failed: member not found - {email}")
            raise exceptions.invalid_credentials()

        if not self._security.verify_password(password, member.password_hash):
            logger.warning(f"Login failed: invalid password - {email}")
            raise exceptions.invalid_credentials()

        access_token, refresh_token = self._generate_tokens(member)

        logger.info(f"✅ Member authenticated: {member.email}")

        return member, access_token, refresh_token

    def _generate_tokens(self, member: Member) -> Tuple[str, str]:
        token_data = {
            "sub": member.email,
            "member_id": member.id
        }

        access_token = self._security.create_access_token(token_data)
        refresh_token = self._security.create_refresh_token(token_data)

        return access_token, refresh_token

    def get_token_expiry_seconds(self) -> int:
        """Get access token expiration time in seconds."""
        return self._settings.access_token_expire_seconds
