"""Tests for PasscodeService on the in-memory backend."""

from uuid import uuid4

from kanban.core.result import Err, ErrorKind, Ok, unwrap


class TestCreatePasscode:
    async def test_creates_non_admin(self, core):
        passcode = unwrap(await core.services.passcode.create_passcode("123456", "Guest", is_admin=False))

        assert passcode.name == "Guest"
        assert passcode.is_admin is False
        assert passcode.last_used_at is None
        assert passcode.code_hash != "123456"
        assert await core.services.passcode.find_by_code("123456") == passcode

    async def test_duplicate_code_rejected(self, core):
        unwrap(await core.services.passcode.create_passcode("123456", "Guest", is_admin=False))

        result = await core.services.passcode.create_passcode("123456", "Other", is_admin=True)

        assert result == Err(ErrorKind.DUPLICATE_CREDENTIAL, "This passcode already exists")
        assert len(await core.services.passcode.list_passcodes()) == 1

    async def test_malformed_code_rejected(self, core):
        result = await core.services.passcode.create_passcode("12345", "Guest", is_admin=False)

        assert isinstance(result, Err)
        assert result.kind == ErrorKind.MALFORMED_INPUT
        assert await core.services.passcode.has_any() is False


class TestCreateFirstAdmin:
    async def test_creates_admin_when_empty(self, core):
        assert await core.services.passcode.create_first_admin("000000") == Ok(True)

        [admin] = await core.services.passcode.list_passcodes()
        assert admin.is_admin is True
        assert admin.name == "Admin"

    async def test_noop_once_setup_completed(self, core):
        unwrap(await core.services.passcode.create_first_admin("000000"))

        assert await core.services.passcode.create_first_admin("111111") == Ok(False)
        assert len(await core.services.passcode.list_passcodes()) == 1

    async def test_malformed_code_rejected(self, core):
        result = await core.services.passcode.create_first_admin("abc")

        assert isinstance(result, Err)
        assert result.kind == ErrorKind.MALFORMED_INPUT


class TestDeletePasscode:
    async def test_last_admin_protected(self, core):
        unwrap(await core.services.passcode.create_first_admin("000000"))
        [admin] = await core.services.passcode.list_passcodes()

        result = await core.services.passcode.delete_passcode(admin.id)

        assert result == Err(ErrorKind.LAST_ADMIN_PROTECTED, "Cannot delete the last admin passcode")
        assert await core.services.passcode.get_passcode(admin.id) is not None

    async def test_admin_deletable_when_another_admin_exists(self, core):
        first = unwrap(await core.services.passcode.create_passcode("000000", "Admin", is_admin=True))
        unwrap(await core.services.passcode.create_passcode("111111", "Second", is_admin=True))

        assert await core.services.passcode.delete_passcode(first.id) == Ok(None)
        assert await core.services.passcode.get_passcode(first.id) is None

    async def test_unknown_id_not_found(self, core):
        result = await core.services.passcode.delete_passcode(uuid4())

        assert isinstance(result, Err)
        assert result.kind == ErrorKind.NOT_FOUND

    async def test_sessions_removed_with_passcode(self, core):
        unwrap(await core.services.passcode.create_first_admin("000000"))
        guest = unwrap(await core.services.passcode.create_passcode("123456", "Guest", is_admin=False))
        login = unwrap(await core.services.session.login("123456"))
        assert await core.services.session.validate_session(login.token) is not None

        unwrap(await core.services.passcode.delete_passcode(guest.id))

        assert await core.services.session.validate_session(login.token) is None
