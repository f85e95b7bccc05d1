"""
Tests for the static user store and password hashing.

These tests verify:
  - Passwords are stored as Argon2 hashes, never plaintext
  - authenticate() returns the user only for the right password
  - Unknown users and wrong passwords are indistinguishable (both None)
  - The default store holds the expected users and roles
"""

import inspect

from app.dependencies import get_current_user, is_protected_path
from app.security import hash_password, verify_password
from app.user_store import InMemoryUserStore, Role, build_user, get_user_store


class TestPasswordHashing:

    def test_hash_is_argon2(self):
        hashed = hash_password("abc123")
        assert hashed.startswith("$argon2")
        assert "abc123" not in hashed

    def test_verify(self):
        hashed = hash_password("abc123")
        assert verify_password("abc123", hashed)
        assert not verify_password("abc124", hashed)


class TestInMemoryUserStore:

    def test_authenticate_success(self):
        store = InMemoryUserStore([build_user("alice", "s3cret", Role.CARD_OWNER)])
        user = store.authenticate("alice", "s3cret")
        assert user is not None
        assert user.username == "alice"
        assert user.has_role(Role.CARD_OWNER)

    def test_wrong_password_and_unknown_user_look_the_same(self):
        store = InMemoryUserStore([build_user("alice", "s3cret", Role.CARD_OWNER)])
        assert store.authenticate("alice", "wrong") is None
        assert store.authenticate("bob", "s3cret") is None

    def test_password_not_in_repr(self):
        user = build_user("alice", "s3cret", Role.CARD_OWNER)
        assert "s3cret" not in repr(user)
        assert user.hashed_password not in repr(user)


class TestDefaultUsers:

    def test_default_users_and_roles(self):
        store = get_user_store()
        assert len(store) == 3
        assert store.get("Thai").has_role(Role.CARD_OWNER)
        assert store.get("Mike").has_role(Role.CARD_OWNER)

        no_cards = store.get("user-no-cards")
        assert no_cards.has_role(Role.NON_OWNER)
        assert not no_cards.has_role(Role.CARD_OWNER)

    def test_store_is_shared(self):
        assert get_user_store() is get_user_store()

    def test_role_values(self):
        assert Role.CARD_OWNER.value == "CARD-OWNER"


class TestAuthDependency:

    def test_credential_check_runs_off_the_event_loop(self):
        """A plain def dependency is run in FastAPI's threadpool."""
        assert not inspect.iscoroutinefunction(get_current_user)

    def test_protected_paths(self):
        assert is_protected_path("/cashcards")
        assert is_protected_path("/cashcards/99")
        assert not is_protected_path("/cashcardsX")
        assert not is_protected_path("/health")
