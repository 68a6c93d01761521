"""
Roles known to the store service.
"""
import enum
from typing import FrozenSet, Union

from .exceptions import ConfigurationError


class Role(str, enum.Enum):
    USER = "User"
    ADMIN = "Admin"
    MANAGER = "Manager"


def parse_roles(*roles: Union[Role, str]) -> FrozenSet[Role]:
    """
    Turn a route's role declaration into a set of Role members.

    Raises:
        ConfigurationError: If a name is not one of the Role values
    """
    parsed = set()
    for role in roles:
        if isinstance(role, Role):
            parsed.add(role)
            continue
        try:
            parsed.add(Role(role))
        except ValueError as e:
            allowed = ", ".join(r.value for r in Role)
            raise ConfigurationError(
                f"Unknown role '{role}' in route declaration. Must be one of: {allowed}",
                details={"role": role},
            ) from e
    return frozenset(parsed)
