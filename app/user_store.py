"""
Static in-memory user store.

The API has no signup flow: its principals are a fixed set of users, each
with a username, an Argon2 password hash, and a set of roles. Only users
holding Role.CARD_OWNER may use the /cashcards endpoints.

Default users:
    ┌───────────────┬──────────┬────────────┐
    │ Username      │ Password │ Role       │
    ├───────────────┼──────────┼────────────┤
    │ Thai          │ abc123   │ CARD-OWNER │
    │ Mike          │ abc123   │ CARD-OWNER │
    │ user-no-cards │ abc123   │ NON-OWNER  │
    └───────────────┴──────────┴────────────┘
"""

import enum
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Iterable

from app.security import hash_password, verify_password


class Role(str, enum.Enum):
    """Roles a user can hold. Inherits from str so values compare and log as plain strings."""
    CARD_OWNER = "CARD-OWNER"   # May create and manage their own cash cards
    NON_OWNER = "NON-OWNER"     # Authenticates fine, but has no card access


@dataclass(frozen=True)
class UserAccount:
    username: str
    hashed_password: str = field(repr=False)
    roles: frozenset[Role] = frozenset()

    def has_role(self, role: Role) -> bool:
        return role in self.roles


class InMemoryUserStore:
    """
    Read-only lookup of users by username.

    authenticate() returns None for both "unknown user" and "wrong password"
    so callers can't tell the two apart. For unknown users a dummy hash is
    still verified, which keeps response timing the same for both cases.
    """

    def __init__(self, users: Iterable[UserAccount]):
        self._users = {user.username: user for user in users}
        self._dummy_hash = hash_password("not-a-real-password")

    def __len__(self) -> int:
        return len(self._users)

    def get(self, username: str) -> UserAccount | None:
        return self._users.get(username)

    def authenticate(self, username: str, password: str) -> UserAccount | None:
        user = self._users.get(username)
        if user is None:
            verify_password(password, self._dummy_hash)
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user


def build_user(username: str, password: str, *roles: Role) -> UserAccount:
    """Create a UserAccount, hashing the plaintext password."""
    return UserAccount(
        username=username,
        hashed_password=hash_password(password),
        roles=frozenset(roles),
    )


@lru_cache
def get_user_store() -> InMemoryUserStore:
    """
    FastAPI dependency returning the process-wide user store.

    Built on first use rather than at import time.
    """
    return InMemoryUserStore([
        build_user("Thai", "abc123", Role.CARD_OWNER),
        build_user("user-no-cards", "abc123", Role.NON_OWNER),
        build_user("Mike", "abc123", Role.CARD_OWNER),
    ])
