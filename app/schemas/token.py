"""
==============================================================================
Token Schemas Module
==============================================================================

Response bodies of the token validation and refresh endpoints.

==============================================================================
"""

from pydantic import BaseModel


class TokenValidationResponse(BaseModel):
    """Whether the presented access token is currently valid."""
    valid: bool


class RefreshTokenResponse(BaseModel):
    """Reissued refresh token, already prefixed with ``Bearer``."""
    token: str
