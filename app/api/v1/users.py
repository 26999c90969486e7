"""
User endpoints: current profile and admin provisioning.
"""

from fastapi import APIRouter, Depends, status

from app.api import deps
from app.core.security.permissions import Actor
from app.models.user.user import User
from app.schemas.common import SuccessResponse
from app.schemas.user import UserCreateRequest, UserResponse
from app.services.users import UserService

router = APIRouter(prefix="/users")


@router.get("/me", response_model=SuccessResponse[UserResponse])
def read_me(current_user: User = Depends(deps.get_current_user)):
    return SuccessResponse.create(data=UserResponse.model_validate(current_user))


@router.post(
    "",
    response_model=SuccessResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_user(
    payload: UserCreateRequest,
    actor: Actor = Depends(deps.get_current_actor),
    service: UserService = Depends(deps.get_user_service),
):
    result = service.create_user(actor, payload)
    return SuccessResponse.create(message=result.message, data=UserResponse.model_validate(result.unwrap()))
