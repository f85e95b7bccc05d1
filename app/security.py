"""
Password hashing utilities.

Passwords are never kept in plaintext, not even for the static user store:
each password is hashed with Argon2id when the store is built, and Basic
credentials are checked against that hash on every request.

We use passlib's CryptContext for safe, high-level Argon2 operations. If the
scheme ever changes, passlib verifies old hashes with the original scheme and
hashes new passwords with the new one (deprecated="auto").
"""

from passlib.context import CryptContext


pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(plain_password: str) -> str:
    """
    Hash a plaintext password using Argon2id.

    Returns:
        An Argon2 hash string (e.g., "$argon2id$v=19$m=65536,t=3,p=4$...").
    """
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plaintext password against a stored Argon2 hash.

    This is a constant-time comparison to prevent timing attacks.
    """
    return pwd_context.verify(plain_password, hashed_password)
