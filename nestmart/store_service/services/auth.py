"""
Login: look the user up, check the password, hand out an access token.
"""
from sqlalchemy.exc import SQLAlchemyError
import logging

from ..exceptions import InvalidCredentials
from ..schemas import AuthenticatedIdentity
from ..security import PasswordHasher, TokenService
from .users import UserService

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, users: UserService, hasher: PasswordHasher, tokens: TokenService):
        self.users = users
        self.hasher = hasher
        self.tokens = tokens

    def sign_in(self, email: str, password: str) -> str:
        """
        Return an access token for valid credentials.

        Raises:
            InvalidCredentials: For an unknown email, a wrong password or a
                failed store lookup, without saying which
        """
        try:
            user = self.users.find_by_email(email)
        except SQLAlchemyError:
            logger.exception("User lookup failed during sign-in")
            raise InvalidCredentials() from None

        if user is None:
            self.hasher.dummy_verify(password)
            raise InvalidCredentials()

        if not self.hasher.verify(password, user.password):
            raise InvalidCredentials()

        return self.tokens.issue({
            "sub": str(user.id),
            "username": user.email,
            "role": user.role.value,
        })

    def identity_from_token(self, token: str) -> AuthenticatedIdentity:
        return self.tokens.decode_identity(token)
