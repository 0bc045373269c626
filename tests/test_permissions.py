import httpx
import pytest

from app.core.permissions import authorize_admin, check_is_admin
from app.errors import AuthorizationError, CollaboratorError
from app.services.identity_client import IdentityClient
from tests.fakes import identity_transport

pytestmark = pytest.mark.unit

USERS = {
    "root": {"role": "admin"},
    "bob": {"role": "user"},
    "ghost": {"name": "no role"},
}


def identity(transport=None) -> IdentityClient:
    return IdentityClient("http://identity.test", transport=transport or identity_transport(USERS))


def test_check_is_admin():
    assert check_is_admin("admin")
    assert not check_is_admin("Admin")
    assert not check_is_admin(None)


@pytest.mark.asyncio
async def test_admin_is_allowed():
    assert await authorize_admin("root", identity()) == "root"


@pytest.mark.asyncio
@pytest.mark.parametrize("caller", ["bob", "ghost"])
async def test_non_admin_is_forbidden(caller):
    with pytest.raises(AuthorizationError) as excinfo:
        await authorize_admin(caller, identity())

    assert excinfo.value.status_code == 403


@pytest.mark.asyncio
@pytest.mark.parametrize("caller", [None, ""])
async def test_missing_caller_is_unauthorized(caller):
    with pytest.raises(AuthorizationError) as excinfo:
        await authorize_admin(caller, identity())

    assert excinfo.value.status_code == 401


@pytest.mark.asyncio
async def test_unknown_caller_fails_closed():
    with pytest.raises(AuthorizationError) as excinfo:
        await authorize_admin("nobody", identity())

    assert excinfo.value.status_code == 401
    assert excinfo.value.details["status_code"] == 404


@pytest.mark.asyncio
async def test_identity_timeout_fails_closed():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(AuthorizationError) as excinfo:
        await authorize_admin("root", identity(httpx.MockTransport(handler)))

    assert excinfo.value.status_code == 401
    assert isinstance(excinfo.value.__cause__, CollaboratorError)


@pytest.mark.asyncio
async def test_undecodable_identity_response_fails_closed():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>"))

    with pytest.raises(AuthorizationError):
        await authorize_admin("root", identity(transport))


@pytest.mark.asyncio
async def test_role_is_resolved_on_every_call():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        return httpx.Response(200, json={"role": "admin"})

    client = identity(httpx.MockTransport(handler))
    await authorize_admin("root", client)
    await authorize_admin("root", client)

    assert calls == ["/users/root", "/users/root"]
