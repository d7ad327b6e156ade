"""
==============================================================================
Authentication Endpoints
==============================================================================

Member login and current-member lookup.

==============================================================================
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.db.models import Member
from app.core.dependencies import get_current_member
from app.services.auth_service import AuthService
from app.schemas.auth import (
    LoginRequest,
    TokenResponse,
    MemberInfo,
    CurrentMemberResponse,
    CurrentMemberInfo,
)


router = APIRouter(prefix="/auth", tags=["Authentication"])


class AuthController:
    """Controller for authentication operations."""

    def __init__(self, db: Session):
        self._service = AuthService(db)

    def login(self, request: LoginRequest) -> TokenResponse:
        """Authenticate member and generate tokens."""
        member, access_token, refresh_token = self._service.authenticate(
            request.email,
            request.password
        )

        return TokenResponse(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=self._service.get_token_expiry_seconds(),
            member=MemberInfo.model_validate(member)
        )


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, db: Session = Depends(get_db)):
    """Authenticate member and get tokens."""
    controller = AuthController(db)
    return controller.login(request)


@router.get("/me", response_model=CurrentMemberResponse)
async def get_current_member_info(member: Member = Depends(get_current_member)):
    """Get current authenticated member information."""
    return CurrentMemberResponse(member=CurrentMemberInfo.model_validate(member))
