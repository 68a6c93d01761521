"""
User persistence: the credential store the auth flow reads from.
"""
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from ..exceptions import EmailAlreadyRegistered, NotFoundError, PasswordPolicyError
from ..models import User
from ..schemas import UserCreate, normalize_email
from ..security import PasswordHasher

logger = logging.getLogger(__name__)


class UserService:
    def __init__(
        self,
        db: Session,
        hasher: PasswordHasher,
        password_min_length: int,
        password_max_length: int = 1024,
    ):
        self.db = db
        self.hasher = hasher
        self.password_min_length = password_min_length
        self.password_max_length = password_max_length

    def check_password_policy(self, password: str) -> None:
        """
        Raises:
            PasswordPolicyError: Too short, too long (in UTF-8 bytes) or not
                encodable as UTF-8
        """
        if len(password) < self.password_min_length:
            raise PasswordPolicyError(
                f"Password must be at least {self.password_min_length} characters long",
                code="PASSWORD_TOO_SHORT",
            )
        try:
            size = len(password.encode("utf-8"))
        except UnicodeEncodeError as e:
            raise PasswordPolicyError(
                "Password contains characters that cannot be encoded",
                code="PASSWORD_NOT_ENCODABLE",
            ) from e
        if size > self.password_max_length:
            raise PasswordPolicyError(
                f"Password must be at most {self.password_max_length} bytes long",
                code="PASSWORD_TOO_LONG",
            )

    def create(self, data: UserCreate) -> User:
        """
        Register a user. The password is hashed here, before the first write.

        Raises:
            PasswordPolicyError: Password outside the configured policy
            EmailAlreadyRegistered: Another user already has this email
        """
        self.check_password_policy(data.password)

        email = normalize_email(data.email)
        if self.find_by_email(email) is not None:
            raise EmailAlreadyRegistered()

        user = User(
            name=data.name,
            email=email,
            password=self.hasher.hash(data.password),
            role=data.role,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same email
            self.db.rollback()
            raise EmailAlreadyRegistered() from e
        self.db.refresh(user)
        logger.info("Created user id=%s role=%s", user.id, user.role.value)
        return user

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def get(self, user_id: int) -> User:
        user = self.find_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found", code="USER_NOT_FOUND")
        return user

    def list(self) -> List[User]:
        return self.db.query(User).order_by(User.id).all()

    def delete(self, user_id: int) -> None:
        user = self.get(user_id)
        self.db.delete(user)
        self.db.commit()
        logger.info("Deleted user id=%s", user_id)
