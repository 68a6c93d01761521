"""
Auth Router - login and identity endpoints.
"""
from fastapi import APIRouter, Depends, Request, status

from ..dependencies import get_auth_service, require_roles
from ..exceptions import InvalidCredentials
from ..schemas import AuthenticatedIdentity, LoginRequest, Token, normalize_email
from ..services.auth import AuthService
from ..utils.event_logger import log_auth_event

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=Token, status_code=status.HTTP_200_OK)
def login(
    credentials: LoginRequest,
    request: Request,
    auth: AuthService = Depends(get_auth_service),
):
    try:
        token = auth.sign_in(credentials.email, credentials.password)
    except InvalidCredentials:
        # Submitted credentials stay out of the log
        log_auth_event("login_failure", request)
        raise
    log_auth_event("login_success", request, email=normalize_email(credentials.email))
    return Token(access_token=token)


@router.get("/me", response_model=AuthenticatedIdentity)
def me(identity: AuthenticatedIdentity = Depends(require_roles())):
    """The identity carried by the presented access token."""
    return identity
