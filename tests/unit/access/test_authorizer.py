"""Tests for the request gate: static API token first, then session cookie."""

from kanban.core.modules.access.authorizer import AuthMethod, RequestAuthorizer, api_token_candidates
from kanban.core.result import Err, ErrorKind, Ok, unwrap

API_TOKEN = "s3cret-token"


async def login_guest(core) -> str:
    unwrap(await core.services.passcode.create_passcode("123456", "Guest", is_admin=False))
    return unwrap(await core.services.session.login("123456")).token


class TestApiTokenCandidates:
    def test_bearer_header(self):
        assert api_token_candidates("Bearer abc", None) == ["abc"]

    def test_scheme_is_case_sensitive(self):
        assert api_token_candidates("bearer abc", None) == []
        assert api_token_candidates("BEARER abc", None) == []

    def test_other_schemes_ignored(self):
        assert api_token_candidates("Basic abc", None) == []
        assert api_token_candidates("Bearer", None) == []

    def test_both_sources(self):
        assert api_token_candidates("Bearer abc", "xyz") == ["abc", "xyz"]
        assert api_token_candidates(None, "xyz") == ["xyz"]


class TestRequestAuthorizer:
    async def test_open_when_no_token_configured(self, core):
        authorizer = RequestAuthorizer(None, core.services.session)

        result = await authorizer.authorize(None, None, None)

        assert authorizer.is_open
        assert isinstance(result, Ok)
        assert result.value.method == AuthMethod.OPEN

    async def test_empty_token_means_open(self, core):
        assert RequestAuthorizer("", core.services.session).is_open

    async def test_bearer_token(self, core):
        authorizer = RequestAuthorizer(API_TOKEN, core.services.session)

        context = unwrap(await authorizer.authorize(f"Bearer {API_TOKEN}", None, None))

        assert context.method == AuthMethod.API_TOKEN
        assert context.session is None

    async def test_x_api_token_header(self, core):
        authorizer = RequestAuthorizer(API_TOKEN, core.services.session)

        context = unwrap(await authorizer.authorize(None, API_TOKEN, None))

        assert context.method == AuthMethod.API_TOKEN

    async def test_lowercase_bearer_rejected(self, core):
        authorizer = RequestAuthorizer(API_TOKEN, core.services.session)

        result = await authorizer.authorize(f"bearer {API_TOKEN}", None, None)

        assert result == Err(ErrorKind.UNAUTHORIZED, "Unauthorized")

    async def test_wrong_token_falls_back_to_session(self, core):
        token = await login_guest(core)
        authorizer = RequestAuthorizer(API_TOKEN, core.services.session)

        context = unwrap(await authorizer.authorize("Bearer wrong", "also-wrong", token))

        assert context.method == AuthMethod.SESSION
        assert context.session is not None
        assert context.session.name == "Guest"

    async def test_neither_token_nor_session(self, core):
        authorizer = RequestAuthorizer(API_TOKEN, core.services.session)

        assert await authorizer.authorize(None, None, None) == Err(ErrorKind.UNAUTHORIZED, "Unauthorized")
        assert await authorizer.authorize(None, None, "bogus") == Err(ErrorKind.UNAUTHORIZED, "Unauthorized")

    async def test_logged_out_session_rejected(self, core):
        token = await login_guest(core)
        authorizer = RequestAuthorizer(API_TOKEN, core.services.session)
        await core.services.session.logout(token)

        result = await authorizer.authorize(None, None, token)

        assert isinstance(result, Err)


class TestEnsureAdmin:
    async def test_admin_session(self, core):
        unwrap(await core.services.passcode.create_first_admin("000000"))
        token = unwrap(await core.services.session.login("000000")).token

        info = unwrap(await core.services.access.ensure_admin(token))

        assert info.is_admin is True

    async def test_non_admin_session(self, core):
        token = await login_guest(core)

        result = await core.services.access.ensure_admin(token)

        assert isinstance(result, Err)
        assert result.kind == ErrorKind.UNAUTHORIZED

    async def test_no_session(self, core):
        result = await core.services.access.ensure_admin(None)

        assert isinstance(result, Err)
        assert result.kind == ErrorKind.UNAUTHORIZED
