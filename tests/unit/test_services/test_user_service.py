"""Unit tests for user and membership services."""
import pytest

from slotpoll.core.exceptions import AuthenticationRequired, PermissionDenied
from slotpoll.services import (
    add_member,
    authenticate_user,
    create_schedule_poll,
    emails_for,
    list_members,
    register_user,
    remove_member,
    suggest_emails,
)


@pytest.mark.unit
class TestRegisterAndLogin:
    """Test account creation and credential checks."""

    @pytest.mark.asyncio
    async def test_register_normalizes_email_and_hashes_password(self, store):
        voter = await register_user(store, "  Sam@Example.COM ", "secret1")

        assert voter.email == "sam@example.com"
        user = await store.get("user_profiles", {"id": voter.user_id})
        assert user["password_hash"] != "secret1"
        assert user["password_hash"].startswith("$argon2")

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, store):
        await register_user(store, "sam@example.com", "secret1")
        with pytest.raises(ValueError, match="already exists"):
            await register_user(store, "SAM@example.com", "secret2")

    @pytest.mark.asyncio
    async def test_short_password_rejected(self, store):
        with pytest.raises(ValueError, match="at least 6"):
            await register_user(store, "sam@example.com", "12345")

    @pytest.mark.asyncio
    async def test_invalid_email_rejected(self, store):
        with pytest.raises(ValueError, match="invalid"):
            await register_user(store, "not-an-email", "secret1")

    @pytest.mark.asyncio
    async def test_authenticate(self, store):
        registered = await register_user(store, "sam@example.com", "secret1")

        voter = await authenticate_user(store, "Sam@example.com", "secret1")
        assert voter == registered

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email,password", [
        ("sam@example.com", "wrong-password"),
        ("nobody@example.com", "secret1"),
        ("garbage", "secret1"),
    ])
    async def test_bad_credentials(self, store, email, password):
        await register_user(store, "sam@example.com", "secret1")
        with pytest.raises(AuthenticationRequired, match="Invalid email or password"):
            await authenticate_user(store, email, password)


@pytest.mark.unit
class TestSuggestions:
    """Test e-mail autocomplete."""

    @pytest.mark.asyncio
    async def test_needs_three_characters(self, store):
        await register_user(store, "sam@example.com", "secret1")
        assert await suggest_emails(store, "sa") == []
        assert await suggest_emails(store, "sam") == ["sam@example.com"]

    @pytest.mark.asyncio
    async def test_at_most_five(self, store):
        for n in range(7):
            await register_user(store, f"team{n}@example.com", "secret1")
        assert len(await suggest_emails(store, "TEAM")) == 5

    @pytest.mark.asyncio
    async def test_emails_for(self, store):
        sam = await register_user(store, "sam@example.com", "secret1")
        kim = await register_user(store, "kim@example.com", "secret1")

        assert await emails_for(store, [sam.user_id, kim.user_id, sam.user_id]) == {
            sam.user_id: "sam@example.com",
            kim.user_id: "kim@example.com",
        }
        assert await emails_for(store, []) == {}


@pytest.mark.unit
class TestMembers:
    """Test poll membership management."""

    @pytest.mark.asyncio
    async def test_add_list_remove(self, store):
        owner = await register_user(store, "owner@example.com", "secret1")
        guest = await register_user(store, "guest@example.com", "secret1")
        poll = await create_schedule_poll(store, owner, "Team sync", ["Mon"])

        member = await add_member(store, owner, poll["id"], "Guest@example.com")
        assert member["user_id"] == guest.user_id
        assert member["email"] == "guest@example.com"

        members = await list_members(store, poll["id"])
        assert members == [member]

        await remove_member(store, owner, poll["id"], member["id"])
        assert await list_members(store, poll["id"]) == []

    @pytest.mark.asyncio
    async def test_add_member_errors(self, store):
        owner = await register_user(store, "owner@example.com", "secret1")
        await register_user(store, "guest@example.com", "secret1")
        poll = await create_schedule_poll(store, owner, "Team sync", ["Mon"])

        with pytest.raises(ValueError, match="No user"):
            await add_member(store, owner, poll["id"], "ghost@example.com")
        with pytest.raises(ValueError, match="owner"):
            await add_member(store, owner, poll["id"], "owner@example.com")

        await add_member(store, owner, poll["id"], "guest@example.com")
        with pytest.raises(ValueError, match="already a member"):
            await add_member(store, owner, poll["id"], "guest@example.com")

    @pytest.mark.asyncio
    async def test_only_owner_manages_members(self, store):
        owner = await register_user(store, "owner@example.com", "secret1")
        guest = await register_user(store, "guest@example.com", "secret1")
        poll = await create_schedule_poll(store, owner, "Team sync", ["Mon"])

        with pytest.raises(PermissionDenied):
            await add_member(store, guest, poll["id"], "guest@example.com")

    @pytest.mark.asyncio
    async def test_remove_unknown_member(self, store):
        owner = await register_user(store, "owner@example.com", "secret1")
        poll = await create_schedule_poll(store, owner, "Team sync", ["Mon"])

        with pytest.raises(ValueError, match="Member not found"):
            await remove_member(store, owner, poll["id"], 999)
