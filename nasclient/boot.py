"""Boot pool management."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol


class _Caller(Protocol):
    async def call(self, method: str, params: list[Any] | None = None, timeout: float | None = None) -> Any: ...

    async def call_job(self, method: str, params: list[Any] | None = None, timeout: float | None = None) -> Any: ...


@dataclass
class BootDisk:
    """A disk in the boot pool."""

    name: str = ""
    label: str = ""
    size: int = 0
    path: str = ""
    status: str = ""
    serial: str = ""
    model: str = ""
    type: str = ""
    available: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BootDisk:
        return cls(
            name=data.get("name") or "",
            label=data.get("label") or "",
            size=data.get("size") or 0,
            path=data.get("path") or "",
            status=data.get("status") or "",
            serial=data.get("serial") or "",
            model=data.get("model") or "",
            type=data.get("type") or "",
            available=bool(data.get("available", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "label": self.label,
            "size": self.size,
            "path": self.path,
            "status": self.status,
            "serial": self.serial,
            "model": self.model,
            "type": self.type,
            "available": self.available,
        }


def _vdevs(items: Any) -> list[BootVdev]:
    return [BootVdev.from_dict(item) for item in items or []]


@dataclass
class BootVdev:
    """A virtual device of the boot pool, possibly with children."""

    name: str = ""
    type: str = ""
    status: str = ""
    stats: Any = None
    children: list[BootVdev] = field(default_factory=list)
    device: str = ""
    disk: str = ""
    path: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BootVdev:
        return cls(
            name=data.get("name") or "",
            type=data.get("type") or "",
            status=data.get("status") or "",
            stats=data.get("stats"),
            children=_vdevs(data.get("children")),
            device=data.get("device") or "",
            disk=data.get("disk") or "",
            path=data.get("path") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "status": self.status,
            "stats": self.stats,
            "children": [child.to_dict() for child in self.children],
        }
        if self.device:
            out["device"] = self.device
        if self.disk:
            out["disk"] = self.disk
        if self.path:
            out["path"] = self.path
        return out


@dataclass
class BootTopology:
    data: list[BootVdev] = field(default_factory=list)
    log: list[BootVdev] = field(default_factory=list)
    cache: list[BootVdev] = field(default_factory=list)
    spare: list[BootVdev] = field(default_factory=list)
    special: list[BootVdev] = field(default_factory=list)
    dedup: list[BootVdev] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BootTopology:
        return cls(
            data=_vdevs(data.get("data")),
            log=_vdevs(data.get("log")),
            cache=_vdevs(data.get("cache")),
            spare=_vdevs(data.get("spare")),
            special=_vdevs(data.get("special")),
            dedup=_vdevs(data.get("dedup")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "data": [v.to_dict() for v in self.data],
            "log": [v.to_dict() for v in self.log],
            "cache": [v.to_dict() for v in self.cache],
            "spare": [v.to_dict() for v in self.spare],
            "special": [v.to_dict() for v in self.special],
            "dedup": [v.to_dict() for v in self.dedup],
        }


@dataclass
class BootState:
    """The current state of the boot pool."""

    name: str = ""
    id: str = ""
    guid: str = ""
    hostname: str = ""
    status: str = ""
    scan: Any = None
    properties: dict[str, Any] = field(default_factory=dict)
    groups: list[BootVdev] = field(default_factory=list)
    topology: BootTopology = field(default_factory=BootTopology)
    healthy: bool = False
    warning: bool = False
    unknown: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BootState:
        return cls(
            name=data.get("name") or "",
            id=data.get("id") or "",
            guid=str(data.get("guid") or ""),
            hostname=data.get("hostname") or "",
            status=data.get("status") or "",
            scan=data.get("scan"),
            properties=dict(data.get("properties") or {}),
            groups=_vdevs(data.get("groups")),
            topology=BootTopology.from_dict(data.get("topology") or {}),
            healthy=bool(data.get("healthy", False)),
            warning=bool(data.get("warning", False)),
            unknown=bool(data.get("unknown", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "id": self.id,
            "guid": self.guid,
            "hostname": self.hostname,
            "status": self.status,
            "scan": self.scan,
            "properties": self.properties,
            "groups": [g.to_dict() for g in self.groups],
            "topology": self.topology.to_dict(),
            "healthy": self.healthy,
            "warning": self.warning,
            "unknown": self.unknown,
        }


@dataclass
class BootAttachRequest:
    """Parameters for ``boot.attach``."""

    device: str = ""
    expand: bool = False

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"dev": self.device}
        if self.expand:
            out["expand"] = True
        return out


class BootClient:
    """Disks, state, mirroring and scrubbing of the boot pool."""

    def __init__(self, client: _Caller) -> None:
        self.client = client

    async def get_disks(self) -> list[BootDisk]:
        result = await self.client.call("boot.get_disks", [])
        return [BootDisk.from_dict(item) for item in result or []]

    async def get_state(self) -> BootState:
        result = await self.client.call("boot.get_state", [])
        return BootState.from_dict(result or {})

    async def attach(self, device: str, expand: bool = False) -> None:
        """Attach a disk to the boot pool, turning a stripe into a mirror."""
        options: dict[str, Any] = {}
        if expand:
            options["expand"] = True
        await self.client.call_job("boot.attach", [device, options])

    async def detach(self, device: str) -> None:
        await self.client.call("boot.detach", [device])

    async def replace(self, label: str, device: str) -> None:
        await self.client.call("boot.replace", [label, device])

    async def scrub(self) -> None:
        await self.client.call_job("boot.scrub", [])

    async def get_scrub_interval(self) -> int:
        """Return the automatic scrub interval in days."""
        return int(await self.client.call("boot.get_scrub_interval", []) or 0)

    async def set_scrub_interval(self, interval: int) -> None:
        await self.client.call("boot.set_scrub_interval", [interval])