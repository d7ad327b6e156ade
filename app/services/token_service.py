"""
==============================================================================
Token Service Module
==============================================================================

Bearer token validation and refresh-token reissue.

Refresh Flow:
------------
    refresh token ──▶ verify (signature, expiry, type=refresh)
                  ──▶ subject (member email)
                  ──▶ member still registered?
                  ──▶ new refresh token for that subject

Any step failing raises ValueError; the HTTP adapter turns it into a 400
response carrying the same message.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.core.security import SecurityManager, get_security_manager
from app.services.entity_validation_service import EntityValidationService


# Module logger
logger = logging.getLogger(__name__)


class TokenService:
    """
    Validates access tokens and reissues refresh tokens.

    Example:
        >>> tokens = TokenService(db_session)
        >>> tokens.validate_access_token(access_token)
        True
        >>> email = tokens.extract_username(refresh_token)
        >>> new_refresh = tokens.regenerate_refresh_token(email)
    """

    def __init__(
        self,
        db: Session,
        security: Optional[SecurityManager] = None,
        validator: Optional[EntityValidationService] = None
    ) -> None:
        self._security = security or get_security_manager()
        self._validator = validator or EntityValidationService(db)

    def validate_access_token(self, token: str) -> bool:
        """Check signature and expiry; never raises for a bad token."""
        is_valid = self._security.validate_access_token(token)
        logger.debug(f"Access token validation result: {is_valid}")
        return is_valid

    def extract_username(self, refresh_token: str) -> str:
        """
        Get the member email a refresh token was issued to.

        Raises:
            ValueError: If the refresh token is invalid or has no subject
        """
        return self._security.extract_subject(
            refresh_token,
            SecurityManager.TOKEN_TYPE_REFRESH
        )

    def regenerate_refresh_token(self, email: str) -> str:
        """
        Issue a fresh refresh token for a registered member.

        Args:
            email: Token subject

        Returns:
            Encoded refresh token

        Raises:
            ValueError: If no member is registered under ``email``
        """
        member = self._validator.find_member_by_email(email)

        if member is None:
            logger.warning(f"Refresh token requested for unknown member: {email}")
            raise ValueError(f"No member is registered with email {email}")

        refresh_token = self._security.create_refresh_token({
            "sub": member.email,
            "member_id": member.id
        })

        logger.info(f"✅ Refresh token reissued for: {member.email}")
        return refresh_token
