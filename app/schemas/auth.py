"""
==============================================================================
Authentication Schemas Module
==============================================================================

Request and response schemas for member login.

==============================================================================
"""

from datetime import datetime
from pydantic import BaseModel, Field, field_validator


class LoginRequest(BaseModel):
    """Login credentials."""
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower().strip()


class MemberInfo(BaseModel):
    """Basic member info for token response."""
    id: int
    email: str
    name: str

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    """Token response after authentication."""
    success: bool = Field(default=True)
    access_token: str
    refresh_token: str
    token_type: str = Field(default="bearer")
    expires_in: int
    member: MemberInfo


class CurrentMemberInfo(MemberInfo):
    created_at: datetime


class CurrentMemberResponse(BaseModel):
    """Current member details response."""
    success: bool = Field(default=True)
    member: CurrentMemberInfo
