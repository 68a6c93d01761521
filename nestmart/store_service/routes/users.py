"""
Users Router - registration and account administration.
"""
from fastapi import APIRouter, Depends, Request, Response, status
from typing import List

from ..dependencies import get_user_service, require_roles
from ..roles import Role
from ..schemas import UserCreate, UserOut
from ..services.users import UserService
from ..utils.event_logger import log_auth_event

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, request: Request, users: UserService = Depends(get_user_service)):
    user = users.create(payload)
    log_auth_event("user_registered", request, email=user.email, user_id=user.id, role=user.role.value)
    return user


@router.get(
    "",
    response_model=List[UserOut],
    dependencies=[Depends(require_roles(Role.ADMIN, Role.MANAGER))],
)
def list_users(users: UserService = Depends(get_user_service)):
    return users.list()


@router.get(
    "/{user_id}",
    response_model=UserOut,
    dependencies=[Depends(require_roles(Role.ADMIN, Role.MANAGER))],
)
def get_user(user_id: int, users: UserService = Depends(get_user_service)):
    return users.get(user_id)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_roles(Role.ADMIN))],
)
def delete_user(user_id: int, users: UserService = Depends(get_user_service)):
    users.delete(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
