"""
Request pipeline for protected routes.

Order per request: bearer token -> verified identity on request.state ->
role gate -> route handler. ``require_roles`` depends on
``get_current_identity``, so the gate never runs for an unauthenticated
request.
"""
from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session
from typing import Optional, Union
import logging

from .config import Settings
from .db import get_db
from .exceptions import Forbidden, TokenExpired, TokenInvalid, Unauthenticated
from .models import User
from .roles import Role, parse_roles
from .schemas import AuthenticatedIdentity
from .security import PasswordHasher, TokenService, allow
from .services.auth import AuthService
from .services.products import ProductService
from .services.users import UserService
from .utils.event_logger import log_auth_event

logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_user_service(
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    settings: Settings = Depends(get_settings),
) -> UserService:
    return UserService(db, hasher, settings.PASSWORD_MIN_LENGTH, settings.PASSWORD_MAX_LENGTH)


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(db)


def get_auth_service(
    users: UserService = Depends(get_user_service),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(users, hasher, tokens)


def extract_bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise Unauthenticated()
    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token or " " in token:
        raise Unauthenticated()
    return token


def get_current_identity(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
) -> AuthenticatedIdentity:
    token = extract_bearer_token(authorization)
    try:
        identity = tokens.decode_identity(token)
    except TokenExpired as e:
        logger.debug("Rejected expired token")
        raise Unauthenticated() from e
    except TokenInvalid as e:
        logger.debug("Rejected invalid token: %s", e.message)
        raise Unauthenticated() from e

    request.state.identity = identity
    return identity


def require_roles(*roles: Union[Role, str]):
    """
    Dependency factory for role-gated routes.

    ``require_roles()`` only demands authentication. Unknown role names
    raise ConfigurationError here, when the route is declared.
    """
    required = parse_roles(*roles)

    def verify_roles(
        request: Request,
        identity: AuthenticatedIdentity = Depends(get_current_identity),
    ) -> AuthenticatedIdentity:
        if not allow(identity, required):
            log_auth_event(
                "access_denied", request,
                email=identity.username, user_id=identity.user_id,
                role=identity.role.value, path=request.url.path,
            )
            raise Forbidden()
        return identity

    verify_roles.required_roles = required
    return verify_roles


def get_identity_user(
    identity: AuthenticatedIdentity,
    users: UserService,
) -> User:
    """The stored user behind an identity; a token for a deleted user is unauthenticated."""
    user = users.find_by_id(identity.user_id)
    if user is None:
        raise Unauthenticated()
    return user
