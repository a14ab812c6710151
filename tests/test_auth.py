import copy
import json

import pytest

from nasclient.auth import AuthClient, GenerateTokenRequest, TokenResponse
from nasclient.errors import APIError, TrueNASError


class FakeCaller:
    def __init__(self):
        self.responses = {}
        self.errors = {}
        self.calls = []

    def set_response(self, method, value):
        self.responses[method] = json.loads(json.dumps(value))

    def set_error(self, method, code, message):
        self.errors[method] = (code, message)

    async def call(self, method, params=None, timeout=None):
        self.calls.append((method, params))
        if method in self.errors:
            code, message = self.errors[method]
            raise APIError(message=message, code=code)
        return copy.deepcopy(self.responses.get(method))


@pytest.fixture
def caller():
    return FakeCaller()


@pytest.fixture
def client(caller):
    return AuthClient(caller)


@pytest.mark.asyncio
@pytest.mark.parametrize("outcome", [True, False])
async def test_login(caller, client, outcome):
    password = "password"
    caller.set_response("auth.login", outcome)
    assert await client.login("admin", password) is outcome
    assert caller.calls == [("auth.login", ["admin", password])]


@pytest.mark.asyncio
async def test_login_with_api_key(caller, client):
    caller.set_response("auth.login_with_api_key", True)
    assert await client.login_with_api_key("placeholder") is True
    assert caller.calls == [("auth.login_with_api_key", ["placeholder"])]


@pytest.mark.asyncio
async def test_login_error_propagates(caller, client):
    password = "password"
    caller.set_error("auth.login", 401, "Authentication failed")
    with pytest.raises(APIError) as info:
        await client.login("admin", password)
    assert info.value.code == 401
    assert info.value.message == "Authentication failed"


@pytest.mark.asyncio
async def test_logout(caller, client):
    caller.set_response("auth.logout", True)
    assert await client.logout() is None
    assert caller.calls == [("auth.logout", [])]


@pytest.mark.asyncio
@pytest.mark.parametrize("outcome", [True, False])
async def test_check_password(caller, client, outcome):
    password = "password"
    caller.set_response("auth.check_password", outcome)
    assert await client.check_password("admin", password) is outcome
    assert caller.calls == [("auth.check_password", ["admin", password])]


def test_token_params_empty_by_default():
    assert GenerateTokenRequest().to_params() == []


def test_token_params_non_positive_ttl_is_left_out():
    assert GenerateTokenRequest(ttl=0).to_params() == []
    assert GenerateTokenRequest(ttl=-5).to_params() == []


def test_token_params_ttl_and_attributes():
    attributes = {"scope": "read"}
    assert GenerateTokenRequest(ttl=600, attributes=attributes).to_params() == [
        {"ttl": 600, "attributes": attributes}
    ]
    assert GenerateTokenRequest(attributes=attributes).to_params() == [{"attributes": attributes}]
    assert GenerateTokenRequest(ttl=600).to_params() == [{"ttl": 600}]


def test_token_response_from_dict():
    assert TokenResponse.from_dict({"token": "token"}).token == "token"
    assert TokenResponse.from_dict({}).token == ""


@pytest.mark.asyncio
async def test_generate_token(caller, client):
    caller.set_response("auth.generate_token", {"token": "token"})
    result = await client.generate_token(GenerateTokenRequest(ttl=600))
    assert result == TokenResponse(token="token")
    assert caller.calls == [("auth.generate_token", [{"ttl": 600}])]


@pytest.mark.asyncio
async def test_generate_token_without_request(caller, client):
    caller.set_response("auth.generate_token", {"token": "token"})
    result = await client.generate_token(None)
    assert result.token == "token"
    assert caller.calls == [("auth.generate_token", [])]


@pytest.mark.asyncio
async def test_generate_token_rejects_non_object(caller, client):
    caller.set_response("auth.generate_token", "token")
    with pytest.raises(TrueNASError, match="unmarshal result"):
        await client.generate_token(GenerateTokenRequest())