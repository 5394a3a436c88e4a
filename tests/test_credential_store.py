# =============================================================================
# tests/test_credential_store.py - Credential Store Tests
# =============================================================================

from concurrent.futures import ThreadPoolExecutor

import pytest

from todo_api.errors import DuplicateUsernameError, InvalidCredentialsError, InvalidInputError
from todo_api.stores import CredentialStore


class TestRegister:
    """Tests for CredentialStore.register."""

    def test_register_assigns_sequential_ids(self, users):
        alice = users.register("alice", "secret123")
        bob = users.register("bob", "other456")

        assert alice.id == 1
        assert bob.id == 2
        assert users.count() == 2

    def test_password_is_not_stored_in_plaintext(self, users):
        user = users.register("alice", "secret123")

        assert user.password_hash != "secret123"
        assert user.password_hash.startswith("$2")

    def test_duplicate_username_rejected(self, users):
        users.register("alice", "secret123")

        with pytest.raises(DuplicateUsernameError):
            users.register("alice", "different")

        assert users.count() == 1

    @pytest.mark.parametrize(
        "username,password",
        [("", "secret123"), ("alice", ""), (None, "secret123"), ("alice", None)],
    )
    def test_empty_fields_rejected(self, users, username, password):
        with pytest.raises(InvalidInputError):
            users.register(username, password)

        assert users.count() == 0

    def test_concurrent_duplicate_registration_creates_one_user(self, users):
        def attempt(_):
            try:
                users.register("alice", "secret123")
                return True
            except DuplicateUsernameError:
                return False

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(attempt, range(8)))

        assert results.count(True) == 1
        assert users.count() == 1

    def test_default_cost_factor_is_ten(self):
        user = CredentialStore().register("alice", "secret123")

        assert user.password_hash.split("$")[2] == "10"


class TestAuthenticate:
    """Tests for CredentialStore.authenticate."""

    def test_register_then_authenticate(self, users):
        registered = users.register("alice", "secret123")

        user = users.authenticate("alice", "secret123")

        assert user.id == registered.id
        assert user.username == "alice"

    def test_wrong_password_and_unknown_user_are_indistinguishable(self, users):
        users.register("alice", "secret123")

        with pytest.raises(InvalidCredentialsError) as wrong_password:
            users.authenticate("alice", "nope")
        with pytest.raises(InvalidCredentialsError) as unknown_user:
            users.authenticate("mallory", "secret123")

        assert wrong_password.value.to_dict() == unknown_user.value.to_dict()

    def test_missing_fields_are_invalid_input(self, users):
        with pytest.raises(InvalidInputError):
            users.authenticate("alice", "")

    def test_long_password_verifies_consistently(self, users):
        password = "p" * 100
        users.register("alice", password)

        assert users.authenticate("alice", password).username == "alice"


class TestLookup:
    def test_get_and_exists(self, users):
        user = users.register("alice", "secret123")

        assert users.exists(user.id)
        assert users.get(user.id).username == "alice"
        assert not users.exists(99)
        assert users.get(99) is None
