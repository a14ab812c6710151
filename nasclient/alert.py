"""Alerts, alert classes and alert services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Protocol

from .errors import NotFoundError
from .protocol import format_datetime, parse_datetime


class _Caller(Protocol):
    async def call(self, method: str, params: list[Any] | None = None, timeout: float | None = None) -> Any: ...


class AlertLevel(str, Enum):
    INFO = "INFO"
    NOTICE = "NOTICE"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"
    ALERT = "ALERT"
    EMERGENCY = "EMERGENCY"


@dataclass
class Alert:
    """A system alert."""

    uuid: str = ""
    source: str = ""
    klass: str = ""
    args: Any = None
    node: str = ""
    key: str = ""
    datetime: datetime | None = None
    last_occurrence: datetime | None = None
    dismissed: bool = False
    mail: Any = None
    text: str = ""
    level: str = ""
    one_shot: bool = False
    formatted: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Alert:
        return cls(
            uuid=data.get("uuid") or "",
            source=data.get("source") or "",
            klass=data.get("klass") or "",
            args=data.get("args"),
            node=data.get("node") or "",
            key=data.get("key") or "",
            datetime=parse_datetime(data.get("datetime")),
            last_occurrence=parse_datetime(data.get("last_occurrence")),
            dismissed=bool(data.get("dismissed", False)),
            mail=data.get("mail"),
            text=data.get("text") or "",
            level=data.get("level") or "",
            one_shot=bool(data.get("one_shot", False)),
            formatted=data.get("formatted") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "uuid": self.uuid,
            "source": self.source,
            "klass": self.klass,
            "args": self.args,
            "node": self.node,
            "key": self.key,
            "datetime": format_datetime(self.datetime) if self.datetime else None,
            "last_occurrence": format_datetime(self.last_occurrence) if self.last_occurrence else None,
            "dismissed": self.dismissed,
            "mail": self.mail,
            "text": self.text,
            "level": self.level,
            "one_shot": self.one_shot,
            "formatted": self.formatted,
        }


@dataclass
class AlertCategory:
    id: str = ""
    title: str = ""
    level: str = ""
    category: str = ""
    description: str = ""
    proactive_support: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AlertCategory:
        return cls(
            id=data.get("id") or "",
            title=data.get("title") or "",
            level=data.get("level") or "",
            category=data.get("category") or "",
            description=data.get("description") or "",
            proactive_support=bool(data.get("proactive_support", False)),
        )


@dataclass
class AlertPolicy:
    name: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AlertPolicy:
        return cls(name=data.get("name") or "", description=data.get("description") or "")


@dataclass
class AlertService:
    id: int = 0
    name: str = ""
    type: str = ""
    attributes: dict[str, Any] | None = None
    level: str = ""
    enabled: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AlertService:
        return cls(
            id=data.get("id") or 0,
            name=data.get("name") or "",
            type=data.get("type") or "",
            attributes=data.get("attributes"),
            level=data.get("level") or "",
            enabled=bool(data.get("enabled", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "attributes": self.attributes,
            "level": self.level,
            "enabled": self.enabled,
        }


@dataclass
class AlertServiceCreateRequest:
    name: str = ""
    type: str = ""
    attributes: dict[str, Any] | None = None
    level: str = ""
    enabled: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "attributes": self.attributes,
            "level": self.level,
            "enabled": self.enabled,
        }


@dataclass
class AlertServiceUpdateRequest:
    """Fields left empty are not sent."""

    name: str = ""
    type: str = ""
    attributes: dict[str, Any] | None = None
    level: str = ""
    enabled: bool = False

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.name:
            out["name"] = self.name
        if self.type:
            out["type"] = self.type
        if self.attributes:
            out["attributes"] = self.attributes
        if self.level:
            out["level"] = self.level
        if self.enabled:
            out["enabled"] = True
        return out


@dataclass
class AlertClassesUpdateRequest:
    classes: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"classes": self.classes}


class AlertClient:
    """Alert listing, dismissal and alert class configuration."""

    def __init__(self, client: _Caller) -> None:
        self.client = client

    async def list(self) -> list[Alert]:
        result = await self.client.call("alert.list", [])
        return [Alert.from_dict(item) for item in result or []]

    async def dismiss(self, uuid: str) -> None:
        await self.client.call("alert.dismiss", [uuid])

    async def restore(self, uuid: str) -> None:
        await self.client.call("alert.restore", [uuid])

    async def list_categories(self) -> list[AlertCategory]:
        result = await self.client.call("alert.list_categories", [])
        return [AlertCategory.from_dict(item) for item in result or []]

    async def list_policies(self) -> list[AlertPolicy]:
        result = await self.client.call("alert.list_policies", [])
        return [AlertPolicy.from_dict(item) for item in result or []]

    async def get_alert_classes_config(self) -> dict[str, Any]:
        return await self.client.call("alertclasses.config", []) or {}

    async def update_alert_classes(self, request: AlertClassesUpdateRequest) -> dict[str, Any]:
        return await self.client.call("alertclasses.update", [request.to_dict()]) or {}


class AlertServiceClient:
    """Management of alert delivery services."""

    def __init__(self, client: _Caller) -> None:
        self.client = client

    async def list(self) -> list[AlertService]:
        result = await self.client.call("alertservice.query", [])
        return [AlertService.from_dict(item) for item in result or []]

    async def get(self, service_id: int) -> AlertService:
        result = await self.client.call("alertservice.query", [[["id", "=", service_id]]])
        if not result:
            raise NotFoundError("alert_service", f"ID {service_id}")
        return AlertService.from_dict(result[0])

    async def create(self, request: AlertServiceCreateRequest) -> AlertService:
        result = await self.client.call("alertservice.create", [request.to_dict()])
        return AlertService.from_dict(result or {})

    async def update(self, service_id: int, request: AlertServiceUpdateRequest) -> AlertService:
        result = await self.client.call("alertservice.update", [service_id, request.to_dict()])
        return AlertService.from_dict(result or {})

    async def delete(self, service_id: int) -> None:
        await self.client.call("alertservice.delete", [service_id])

    async def test(self, request: AlertServiceCreateRequest) -> None:
        await self.client.call("alertservice.test", [request.to_dict()])

    async def list_types(self) -> dict[str, Any]:
        return await self.client.call("alertservice.list_types", []) or {}