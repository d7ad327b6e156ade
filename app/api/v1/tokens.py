"""
==============================================================================
Token Endpoints
==============================================================================

Bearer token validation and refresh-token reissue.

==============================================================================
"""

from fastapi import APIRouter, Depends, Header
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.core import exceptions
from app.core.security import strip_bearer_prefix
from app.services.token_service import TokenService
from app.schemas.token import RefreshTokenResponse, TokenValidationResponse


router = APIRouter(prefix="/tokens", tags=["Tokens"])


class TokenController:
    """Controller for token operations."""

    def __init__(self, db: Session):
        self._service = TokenService(db)

    def validate(self, authorization: str) -> TokenValidationResponse:
        token = strip_bearer_prefix(authorization)
        return TokenValidationResponse(valid=self._service.validate_access_token(token))

    def refresh(self, authorization: str) -> RefreshTokenResponse:
        """Reissue a refresh token; failures become 400 with the same message."""
        try:
            refresh_token = strip_bearer_prefix(authorization)
            email = self._service.extract_username(refresh_token)
            new_refresh_token = self._service.regenerate_refresh_token(email)
        except ValueError as e:
            raise exceptions.invalid_argument(str(e)) from e

        return RefreshTokenResponse(token=f"Bearer {new_refresh_token}")


@router.get("/validate", response_model=TokenValidationResponse)
async def validate_token(
    authorization: str = Header(...),
    db: Session = Depends(get_db)
):
    """Report whether the bearer access token is currently valid."""
    controller = TokenController(db)
    return controller.validate(authorization)


@router.post("/refresh", response_model=RefreshTokenResponse)
async def regenerate_refresh_token(
    authorization: str = Header(...),
    db: Session = Depends(get_db)
):
    """Issue a new refresh token for the subject of the bearer refresh token."""
    controller = TokenController(db)
    return controller.refresh(authorization)
