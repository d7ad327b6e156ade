"""
==============================================================================
Security Module - Authentication & Cryptography
==============================================================================

JWT issuing/verification and password hashing for shop members.

This module implements:
- SecurityManager: process-wide holder of the crypt context and JWT settings
- Access and refresh token creation
- Token verification (signature, expiry, token type)
- Subject extraction used by refresh-token reissue

Token Structure:
---------------
{
    "sub": "member@example.com",  # Subject (member email)
    "member_id": 42,              # Member primary key
    "type": "access|refresh",     # Token type
    "exp": 1234567890,            # Expiration timestamp
    "iat": 1234567890             # Issued at timestamp
}

==============================================================================
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import get_settings


# Module logger
logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def strip_bearer_prefix(value: str) -> str:
    """Remove a leading literal ``"Bearer "`` from a header value."""
    if value.startswith(BEARER_PREFIX):
        return value[len(BEARER_PREFIX):]
    return value


class SecurityManager:
    """
    Centralized security manager for authentication operations.

    Example:
        >>> security = SecurityManager()
        >>> hashed = security.hash_password("secret123")
        >>> token = security.create_access_token({"sub": "kim@shop.kr"})
        >>> security.validate_access_token(token)
        True
    """

    TOKEN_TYPE_ACCESS = "access"
    TOKEN_TYPE_REFRESH = "refresh"

    BCRYPT_SCHEMES = ["bcrypt"]
    BCRYPT_DEPRECATED = "auto"

    def __init__(self) -> None:
        self._pwd_context = CryptContext(
            schemes=self.BCRYPT_SCHEMES,
            deprecated=self.BCRYPT_DEPRECATED
        )
        self._settings = get_settings()

        logger.debug("SecurityManager initialized")

    # =========================================================================
    # PASSWORD HASHING METHODS
    # =========================================================================

    def hash_password(self, plain_password: str) -> str:
        """
        Hash a plain text password using bcrypt.

        Raises:
            ValueError: If the password is empty
        """
        if not plain_password:
            raise ValueError("Password cannot be empty")

        return self._pwd_context.hash(plain_password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a plain text password against a bcrypt hash.

        Returns:
            True if password matches, False otherwise (including bad hashes)
        """
        try:
            return self._pwd_context.verify(plain_password, hashed_password)
        except (ValueError, TypeError) as e:
            logger.warning(f"Password verification error: {type(e).__name__}")
            return False

    # =========================================================================
    # JWT TOKEN CREATION METHODS
    # =========================================================================

    def create_access_token(
        self,
        data: Dict[str, Any],
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """
        Create a short-lived JWT access token.

        Args:
            data: Payload data (must include 'sub')
            expires_delta: Custom expiration time (optional)

        Returns:
            Encoded JWT access token string
        """
        return self._create_token(
            data=data,
            token_type=self.TOKEN_TYPE_ACCESS,
            expires_delta=expires_delta or timedelta(
                minutes=self._settings.access_token_expire_minutes
            )
        )

    def create_refresh_token(
        self,
        data: Dict[str, Any],
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """
        Create a long-lived JWT refresh token.

        Args:
            data: Payload data (must include 'sub')
            expires_delta: Custom expiration time (optional)

        Returns:
            Encoded JWT refresh token string
        """
        return self._create_token(
            data=data,
            token_type=self.TOKEN_TYPE_REFRESH,
            expires_delta=expires_delta or timedelta(
                days=self._settings.refresh_token_expire_days
            )
        )

    def _create_token(
        self,
        data: Dict[str, Any],
        token_type: str,
        expires_delta: timedelta
    ) -> str:
        payload = data.copy()

        now = datetime.now(timezone.utc)
        expire = now + expires_delta

        payload.update({
            "type": token_type,
            "exp": expire,
            "iat": now
        })

        encoded_token = jwt.encode(
            payload,
            self._settings.jwt_secret_key,
            algorithm=self._settings.jwt_algorithm
        )

        logger.debug(f"Created {token_type} token, expires: {expire.isoformat()}")

        return encoded_token

    # =========================================================================
    # JWT TOKEN VERIFICATION METHODS
    # =========================================================================

    def verify_token(
        self,
        token: str,
        token_type: str = TOKEN_TYPE_ACCESS
    ) -> Optional[Dict[str, Any]]:
        """
        Verify and decode a JWT token.

        Checks the signature, the expiration and the token type.

        Args:
            token: The JWT token string to verify
            token_type: Expected token type ('access' or 'refresh')

        Returns:
            Decoded payload dictionary if valid, None otherwise
        """
        try:
            payload = jwt.decode(
                token,
                self._settings.jwt_secret_key,
                algorithms=[self._settings.jwt_algorithm]
            )

        except jwt.ExpiredSignatureError:
            logger.debug("Token verification failed: token expired")
            return None

        except JWTError as e:
            logger.warning(f"Token verification failed: {e}")
            return None

        if payload.get("type") != token_type:
            logger.warning(
                f"Token type mismatch: expected {token_type}, "
                f"got {payload.get('type')}"
            )
            return None

        return payload

    def validate_access_token(self, token: str) -> bool:
        """Report whether ``token`` is a currently valid access token."""
        return self.verify_token(token, self.TOKEN_TYPE_ACCESS) is not None

    def extract_subject(
        self,
        token: str,
        token_type: str = TOKEN_TYPE_REFRESH
    ) -> str:
        """
        Extract the subject claim from a verified token.

        Args:
            token: JWT token string
            token_type: Expected token type

        Returns:
            The ``sub`` claim (member email)

        Raises:
            ValueError: If the token is invalid, expired, of the wrong type
                or carries no subject
        """
        payload = self.verify_token(token, token_type)

        if payload is None:
            raise ValueError(f"Invalid or expired {token_type} token")

        subject = payload.get("sub")
        if not subject:
            raise ValueError("Token does not contain a subject")

        return subject


@lru_cache(maxsize=1)
def get_security_manager() -> SecurityManager:
    """Get the global SecurityManager instance."""
    return SecurityManager()
