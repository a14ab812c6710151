"""API key management."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

from .errors import NotFoundError
from .protocol import format_datetime, parse_datetime


class _Caller(Protocol):
    async def call(self, method: str, params: list[Any] | None = None, timeout: float | None = None) -> Any: ...


@dataclass
class APIKey:
    """An API key as reported by the middleware."""

    id: int = 0
    name: str = ""
    key: str = ""
    created_at: datetime | None = None
    username: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> APIKey:
        return cls(
            id=data.get("id") or 0,
            name=data.get("name") or "",
            key=data.get("key") or "",
            created_at=parse_datetime(data.get("created_at")),
            username=data.get("username") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "key": self.key,
            "created_at": format_datetime(self.created_at) if self.created_at else None,
            "username": self.username,
        }


@dataclass
class APIKeyCreateRequest:
    """Parameters for ``api_key.create``."""

    name: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> APIKeyCreateRequest:
        return cls(name=data.get("name") or "")

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name}


@dataclass
class APIKeyUpdateRequest:
    """Parameters for ``api_key.update``; fields left as None are not sent."""

    name: str | None = None
    reset: bool | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> APIKeyUpdateRequest:
        return cls(name=data.get("name"), reset=data.get("reset"))

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.name is not None:
            out["name"] = self.name
        if self.reset is not None:
            out["reset"] = self.reset
        return out


class APIKeyClient:
    """Listing, creation, renaming, regeneration and deletion of API keys."""

    def __init__(self, client: _Caller) -> None:
        self.client = client

    async def list(self) -> list[APIKey]:
        result = await self.client.call("api_key.query", [])
        return [APIKey.from_dict(item) for item in result or []]

    async def get(self, key_id: int) -> APIKey:
        result = await self.client.call("api_key.query", [[["id", "=", key_id]]])
        if not result:
            raise NotFoundError("api_key", f"ID {key_id}")
        return APIKey.from_dict(result[0])

    async def create(self, name: str) -> APIKey:
        request = APIKeyCreateRequest(name=name)
        result = await self.client.call("api_key.create", [request.to_dict()])
        return APIKey.from_dict(result or {})

    async def update(self, key_id: int, request: APIKeyUpdateRequest) -> APIKey:
        result = await self.client.call("api_key.update", [key_id, request.to_dict()])
        return APIKey.from_dict(result or {})

    async def update_name(self, key_id: int, name: str) -> APIKey:
        return await self.update(key_id, APIKeyUpdateRequest(name=name))

    async def reset(self, key_id: int) -> APIKey:
        """Regenerate the key value."""
        return await self.update(key_id, APIKeyUpdateRequest(reset=True))

    async def delete(self, key_id: int) -> None:
        await self.client.call("api_key.delete", [key_id])