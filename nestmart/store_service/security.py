"""
Password hashing, access tokens and the role gate.
"""
from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, FrozenSet
import logging
import jwt

from .exceptions import TokenExpired, TokenInvalid
from .roles import Role
from .schemas import AuthenticatedIdentity

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ["sub", "iat", "exp"]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PasswordHasher:
    """Salted pbkdf2_sha256 hashes with a tunable number of rounds."""

    def __init__(self, rounds: int = 29000):
        self._context = CryptContext(
            schemes=["pbkdf2_sha256"],
            deprecated="auto",
            pbkdf2_sha256__default_rounds=rounds,
        )
        self._dummy_hash = self._context.hash("dummy-password")

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, hashed_password: str) -> bool:
        try:
            return self._context.verify(password, hashed_password)
        except (ValueError, TypeError):
            # Unidentifiable stored hash, oversized or unencodable password
            logger.warning("Password could not be checked against the stored hash")
            return False

    def dummy_verify(self, password: str) -> None:
        """Spend the same work as a real verify when there is no user to check."""
        self.verify(password, self._dummy_hash)


class TokenService:
    """
    Issues and verifies signed access tokens.

    Expiry is checked against ``clock`` rather than the wall clock PyJWT
    would use, so ``now > exp`` is the only expiry rule.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(minutes=60),
        clock: Callable[[], datetime] = utcnow,
    ):
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.ttl = ttl
        self._clock = clock

    def issue(self, claims: Dict[str, Any]) -> str:
        issued_at = int(self._clock().timestamp())
        payload = dict(claims)
        payload["iat"] = issued_at
        payload["exp"] = issued_at + int(self.ttl.total_seconds())
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        """
        Verify signature and expiry and return the claims.

        Raises:
            TokenInvalid: Bad signature, malformed token or missing claims
            TokenExpired: The token's exp is in the past
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={
                    "require": REQUIRED_CLAIMS,
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                },
            )
        except jwt.PyJWTError as e:
            raise TokenInvalid() from e

        exp = payload["exp"]
        if not isinstance(exp, (int, float)):
            raise TokenInvalid("exp claim must be numeric")
        if self._clock().timestamp() > exp:
            raise TokenExpired()
        return payload

    def decode_identity(self, token: str) -> AuthenticatedIdentity:
        payload = self.verify(token)
        try:
            return AuthenticatedIdentity(
                user_id=int(payload["sub"]),
                username=payload.get("username", ""),
                role=Role(payload.get("role")),
            )
        except (ValueError, TypeError) as e:
            raise TokenInvalid("Token claims are not valid") from e


def allow(identity: AuthenticatedIdentity, required_roles: FrozenSet[Role]) -> bool:
    """An empty role set admits every authenticated identity."""
    if not required_roles:
        return True
    return identity.role in required_roles
