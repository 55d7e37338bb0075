"""Tests for the User Directory."""

import pytest

from invoicepro.models import DEMO_USER_ID
from invoicepro.services.users import UserDirectory


@pytest.fixture
def users(store):
    return UserDirectory(store)


class TestCreateUser:
    """Tests for registration."""

    def test_creates_user_with_defaults(self, users, stored):
        """Test a new user gets an id, active flag and default settings."""
        result = users.create_user({
            "name": "Rahim",
            "email": "rahim@example.com",
            "password": "secret",
            "company": "Rahim Traders",
        })

        assert result.success is True
        user = result.user
        assert user.id.startswith("USR-")
        assert user.is_active is True
        assert user.settings.tax_rate == 0
        assert user.settings.currency == "৳"
        saved = stored()["users"][-1]
        assert saved["email"] == "rahim@example.com"
        assert saved["password"] == "secret"
        assert saved["isActive"] is True

    def test_duplicate_email_case_insensitive(self, users):
        """Test emails are unique regardless of case."""
        result = users.create_user({"email": "DEMO@invoice.com"})
        assert result.success is False
        assert result.message == "Email exists"

    def test_managed_fields_cannot_be_supplied(self, users):
        """Test callers cannot pick the id or activation state."""
        result = users.create_user({"email": "x@example.com", "id": DEMO_USER_ID, "isActive": False})
        assert result.user.id != DEMO_USER_ID
        assert result.user.is_active is True

    def test_email_required(self, users):
        """Test a blank email is rejected."""
        assert users.create_user({"email": "  "}).success is False

    def test_save_failure(self, users, store, storage):
        """Test a failed save is reported."""
        store.load()
        storage.fail_next_writes(1)

        result = users.create_user({"email": "x@example.com"})

        assert result.success is False
        assert users.find_user_by_email("x@example.com") is None


class TestFindUser:
    """Tests for lookups."""

    def test_find_demo_user(self, users):
        """Test the seeded demo user can be found by id and email."""
        assert users.find_user_by_id(DEMO_USER_ID).name == "Demo User"
        assert users.find_user_by_email(" Demo@Invoice.COM ").id == DEMO_USER_ID

    def test_inactive_users_are_hidden(self, users):
        """Test deactivated users are not returned."""
        assert users.update_user(DEMO_USER_ID, {"isActive": False}) is True
        assert users.find_user_by_id(DEMO_USER_ID) is None
        assert users.find_user_by_email("demo@invoice.com") is None

    def test_missing_user(self, users):
        """Test unknown ids return None."""
        assert users.find_user_by_id("USR-0") is None


class TestUpdateUser:
    """Tests for updates."""

    def test_merges_updates(self, users, stored):
        """Test updates are merged and other fields kept."""
        assert users.update_user(
            DEMO_USER_ID,
            {"lastLogin": "2026-02-01T08:00:00Z", "company": "New Co"},
        ) is True

        saved = stored()["users"][0]
        assert saved["company"] == "New Co"
        assert saved["lastLogin"].startswith("2026-02-01T08:00:00")
        assert saved["password"] == "demo123"
        assert saved["settings"]["taxRate"] == 5

    def test_id_is_immutable(self, users):
        """Test the id cannot be changed through an update."""
        users.update_user(DEMO_USER_ID, {"id": "USR-9"})
        assert users.find_user_by_id(DEMO_USER_ID) is not None

    def test_unknown_user(self, users):
        """Test updating a missing user returns False."""
        assert users.update_user("USR-0", {"name": "x"}) is False

    def test_invalid_update_rejected(self, users):
        """Test an update that breaks the model is refused."""
        assert users.update_user(DEMO_USER_ID, {"email": None}) is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
