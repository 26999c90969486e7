"""
Authentication endpoints: register, login, refresh, logout.
"""

from fastapi import APIRouter, Depends, status

from app.api import deps
from app.models.user.user import User
from app.schemas.auth import AuthResponse, LoginRequest, RefreshTokenRequest, RegisterRequest, TokenResponse
from app.schemas.common import MessageResponse, SuccessResponse
from app.schemas.user import UserResponse
from app.services.auth import AuthService, AuthSession

router = APIRouter(prefix="/auth")


def _auth_payload(session: AuthSession) -> AuthResponse:
    return AuthResponse(
        access_token=session.tokens.access_token,
        refresh_token=session.tokens.refresh_token,
        token_type=session.tokens.token_type,
        user=UserResponse.model_validate(session.user),
    )


@router.post(
    "/register",
    response_model=SuccessResponse[AuthResponse],
    status_code=status.HTTP_201_CREATED,
)
def register(
    payload: RegisterRequest,
    service: AuthService = Depends(deps.get_auth_service),
):
    result = service.register(payload)
    return SuccessResponse.create(message=result.message, data=_auth_payload(result.unwrap()))


@router.post("/login", response_model=SuccessResponse[AuthResponse])
def login(
    payload: LoginRequest,
    service: AuthService = Depends(deps.get_auth_service),
):
    result = service.login(payload)
    return SuccessResponse.create(message=result.message, data=_auth_payload(result.unwrap()))


@router.post("/refresh", response_model=SuccessResponse[TokenResponse])
def refresh(
    payload: RefreshTokenRequest,
    service: AuthService = Depends(deps.get_auth_service),
):
    pair = service.refresh(payload.refresh_token).unwrap()
    return SuccessResponse.create(
        message="Token refreshed successfully",
        data=TokenResponse(
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
            token_type=pair.token_type,
        ),
    )


@router.post("/logout", response_model=MessageResponse)
def logout(
    current_user: User = Depends(deps.get_current_user),
    service: AuthService = Depends(deps.get_auth_service),
):
    service.logout(current_user.id).unwrap()
    return MessageResponse(message="Logged out successfully")
