"""Authentication calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from .errors import TrueNASError


class _Caller(Protocol):
    async def call(self, method: str, params: list[Any] | None = None, timeout: float | None = None) -> Any: ...


@dataclass
class GenerateTokenRequest:
    """Parameters for ``auth.generate_token``; unset fields are not sent."""

    ttl: int = 0
    attributes: Any = None

    def to_params(self) -> list[Any]:
        """Return the positional parameters of the call."""
        if self.ttl <= 0 and self.attributes is None:
            return []
        options: dict[str, Any] = {}
        if self.ttl > 0:
            options["ttl"] = self.ttl
        if self.attributes is not None:
            options["attributes"] = self.attributes
        return [options]


@dataclass
class TokenResponse:
    token: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TokenResponse:
        return cls(token=data.get("token") or "")


class AuthClient:
    """Login, logout, password checks and token generation."""

    def __init__(self, client: _Caller) -> None:
        self.client = client

    async def login(self, username: str, password: str) -> bool:
        return bool(await self.client.call("auth.login", [username, password]))

    async def login_with_api_key(self, api_key: str) -> bool:
        return bool(await self.client.call("auth.login_with_api_key", [api_key]))

    async def logout(self) -> None:
        await self.client.call("auth.logout", [])

    async def check_password(self, username: str, password: str) -> bool:
        return bool(await self.client.call("auth.check_password", [username, password]))

    async def generate_token(self, request: GenerateTokenRequest | None = None) -> TokenResponse:
        params = (request or GenerateTokenRequest()).to_params()
        result = await self.client.call("auth.generate_token", params)
        if result is None:
            return TokenResponse()
        if not isinstance(result, dict):
            raise TrueNASError(f"unmarshal result: unexpected token response {result!r}")
        return TokenResponse.from_dict(result)