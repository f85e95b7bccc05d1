"""
FastAPI dependencies for authentication and authorization.

Dependencies are reusable functions that FastAPI injects into route handlers.
They form a chain that enforces both authentication and role-based access:

  get_current_user (Basic credentials -> UserAccount)   [401 on failure]
      └── require_card_owner (UserAccount -> UserAccount)  [403 without CARD-OWNER]

The /cashcards router is mounted with require_card_owner as a router-level
dependency, so the gate runs before path/body validation and before any
database access. A caller without the right credentials or role therefore
never learns whether a given card exists.

A body that isn't valid JSON is rejected by FastAPI before dependencies
run; for /cashcards paths the validation error handler (app/exceptions.py)
runs enforce_card_owner first, so those requests get 401/403 too.
"""

import logging

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from starlette.concurrency import run_in_threadpool

from app.user_store import InMemoryUserStore, Role, UserAccount, get_user_store

logger = logging.getLogger("cashcard.auth")

# auto_error=False lets us raise our own 401 (with a consistent detail message)
# when the Authorization header is missing entirely.
basic_scheme = HTTPBasic(auto_error=False)

# Paths behind the CARD-OWNER gate
PROTECTED_PREFIX = "/cashcards"


def authenticate(
    credentials: HTTPBasicCredentials | None,
    user_store: InMemoryUserStore,
) -> UserAccount:
    """
    Resolve Basic credentials to a user.

    Raises:
        HTTPException 401: If credentials are missing or don't match a user.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Basic"},
    )

    if credentials is None:
        raise credentials_exception

    user = user_store.authenticate(credentials.username, credentials.password)
    if user is None:
        logger.warning("Failed Basic authentication for user %r", credentials.username)
        raise credentials_exception

    return user


def check_role(user: UserAccount, role: Role) -> UserAccount:
    """
    Raises:
        HTTPException 403: If the user is authenticated but lacks the role.
    """
    if not user.has_role(role):
        logger.warning("User %r denied: missing role %s", user.username, role.value)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Role {role.value} required",
        )
    return user


def get_current_user(
    credentials: HTTPBasicCredentials | None = Depends(basic_scheme),
    user_store: InMemoryUserStore = Depends(get_user_store),
) -> UserAccount:
    """
    Validate HTTP Basic credentials and return the matching user.

    A plain def: Argon2 verification is CPU-bound, so FastAPI runs this in
    its threadpool instead of on the event loop.
    """
    return authenticate(credentials, user_store)


def require_role(role: Role):
    """Build a dependency that requires the authenticated user to hold `role`."""

    async def role_checker(user: UserAccount = Depends(get_current_user)) -> UserAccount:
        return check_role(user, role)

    return role_checker


# The gate for every /cashcards route
require_card_owner = require_role(Role.CARD_OWNER)


def is_protected_path(path: str) -> bool:
    return path == PROTECTED_PREFIX or path.startswith(PROTECTED_PREFIX + "/")


async def enforce_card_owner(request: Request) -> UserAccount:
    """
    Run the CARD-OWNER gate directly against a request's headers.

    FastAPI decodes a JSON body before it solves any dependency, so an
    unparseable body fails validation before require_card_owner runs. The
    validation error handler calls this first, so such requests still get
    401/403 rather than 422.

    Raises:
        HTTPException 401 / 403: As for require_card_owner.
    """
    credentials = await basic_scheme(request)
    user = await run_in_threadpool(authenticate, credentials, get_user_store())
    return check_role(user, Role.CARD_OWNER)
