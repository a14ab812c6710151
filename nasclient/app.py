"""Application listing and querying."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

from .errors import NotFoundError


class _Caller(Protocol):
    async def call(self, method: str, params: list[Any] | None = None, timeout: float | None = None) -> Any: ...


class AppState(str, Enum):
    """Lifecycle state of an application."""

    CRASHED = "CRASHED"
    DEPLOYING = "DEPLOYING"
    RUNNING = "RUNNING"
    STOPPED = "STOPPED"


def _state(value: Any) -> AppState | str:
    text = value or ""
    try:
        return AppState(text)
    except ValueError:
        return text


@dataclass
class AppHostPort:
    host_port: int = 0
    host_ip: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppHostPort:
        return cls(host_port=data.get("host_port") or 0, host_ip=data.get("host_ip") or "")


@dataclass
class AppUsedPort:
    container_port: int = 0
    protocol: str = ""
    host_ports: list[AppHostPort] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppUsedPort:
        return cls(
            container_port=data.get("container_port") or 0,
            protocol=data.get("protocol") or "",
            host_ports=[AppHostPort.from_dict(p) for p in data.get("host_ports") or []],
        )


@dataclass
class AppVolume:
    source: str = ""
    destination: str = ""
    mode: str = ""
    type: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppVolume:
        return cls(
            source=data.get("source") or "",
            destination=data.get("destination") or "",
            mode=data.get("mode") or "",
            type=data.get("type") or "",
        )


@dataclass
class AppContainerDetail:
    id: str = ""
    service_name: str = ""
    image: str = ""
    port_config: list[AppUsedPort] = field(default_factory=list)
    state: str = ""
    volume_mounts: list[AppVolume] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppContainerDetail:
        return cls(
            id=data.get("id") or "",
            service_name=data.get("service_name") or "",
            image=data.get("image") or "",
            port_config=[AppUsedPort.from_dict(p) for p in data.get("port_config") or []],
            state=data.get("state") or "",
            volume_mounts=[AppVolume.from_dict(v) for v in data.get("volume_mounts") or []],
        )


@dataclass
class AppActiveWorkloads:
    containers: int = 0
    used_ports: list[AppUsedPort] = field(default_factory=list)
    container_details: list[AppContainerDetail] = field(default_factory=list)
    volumes: list[AppVolume] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppActiveWorkloads:
        return cls(
            containers=data.get("containers") or 0,
            used_ports=[AppUsedPort.from_dict(p) for p in data.get("used_ports") or []],
            container_details=[
                AppContainerDetail.from_dict(c) for c in data.get("container_details") or []
            ],
            volumes=[AppVolume.from_dict(v) for v in data.get("volumes") or []],
        )


@dataclass
class AppVersionDetails:
    version: str = ""
    human_version: str = ""
    supported: bool = False
    healthy: bool = False
    healthy_error: str = ""
    location: str = ""
    last_update: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppVersionDetails:
        return cls(
            version=data.get("version") or "",
            human_version=data.get("human_version") or "",
            supported=bool(data.get("supported", False)),
            healthy=bool(data.get("healthy", False)),
            healthy_error=data.get("healthy_error") or "",
            location=data.get("location") or "",
            last_update=data.get("last_update") or "",
        )


@dataclass
class App:
    """An installed application."""

    name: str = ""
    id: str = ""
    state: AppState | str = ""
    upgrade_available: bool = False
    human_version: str = ""
    version: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)
    active_workloads: AppActiveWorkloads | None = None
    version_details: AppVersionDetails | None = None
    config: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> App:
        workloads = data.get("active_workloads")
        details = data.get("version_details")
        return cls(
            name=data.get("name") or "",
            id=data.get("id") or "",
            state=_state(data.get("state")),
            upgrade_available=bool(data.get("upgrade_available", False)),
            human_version=data.get("human_version") or "",
            version=data.get("version") or "",
            metadata=dict(data.get("metadata") or {}),
            active_workloads=AppActiveWorkloads.from_dict(workloads) if workloads is not None else None,
            version_details=AppVersionDetails.from_dict(details) if details is not None else None,
            config=data.get("config"),
        )


@dataclass
class AppStatsNetwork:
    interface_name: str = ""
    rx_bytes: int = 0
    tx_bytes: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppStatsNetwork:
        return cls(
            interface_name=data.get("interface_name") or "",
            rx_bytes=data.get("rx_bytes") or 0,
            tx_bytes=data.get("tx_bytes") or 0,
        )


@dataclass
class AppStatsBlkio:
    read: int = 0
    write: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppStatsBlkio:
        return cls(read=data.get("read") or 0, write=data.get("write") or 0)


@dataclass
class AppStats:
    """Resource statistics of one application."""

    app_name: str = ""
    cpu_usage: float = 0.0
    memory: int = 0
    networks: list[AppStatsNetwork] = field(default_factory=list)
    blkio: AppStatsBlkio | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppStats:
        blkio = data.get("blkio")
        return cls(
            app_name=data.get("app_name") or "",
            cpu_usage=float(data.get("cpu_usage") or 0.0),
            memory=data.get("memory") or 0,
            networks=[AppStatsNetwork.from_dict(n) for n in data.get("networks") or []],
            blkio=AppStatsBlkio.from_dict(blkio) if blkio is not None else None,
        )


@dataclass
class AppQueryOptions:
    extra_options: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"extra": self.extra_options} if self.extra_options else {}


@dataclass
class AppCreateRequest:
    release_name: str = ""
    chart_release: str = ""
    values: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"release_name": self.release_name, "chart_release": self.chart_release}
        if self.values:
            out["values"] = self.values
        return out


@dataclass
class AppUpdateRequest:
    values: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"values": self.values} if self.values else {}


def _apps(result: Any) -> list[App]:
    return [App.from_dict(item) for item in result or []]


class AppClient:
    """Queries over installed applications."""

    def __init__(self, client: _Caller) -> None:
        self.client = client

    async def list(self) -> list[App]:
        return _apps(await self.client.call("app.query", []))

    async def list_with_options(self, options: AppQueryOptions | None = None) -> list[App]:
        params: list[Any] = []
        if options is not None:
            params = [[], options.to_dict()]
        return _apps(await self.client.call("app.query", params))

    async def get(self, name: str, extra: dict[str, Any] | None = None) -> App:
        params: list[Any] = [[["name", "=", name]]]
        if extra:
            params.append({"extra": extra})
        result = await self.client.call("app.query", params)
        if not result:
            raise NotFoundError("app", f"name {name}")
        return App.from_dict(result[0])

    async def get_by_id(self, app_id: str) -> App:
        result = await self.client.call("app.query", [[["id", "=", app_id]]])
        if not result:
            raise NotFoundError("app", f"ID {app_id}")
        return App.from_dict(result[0])

    async def query_by_state(self, state: AppState | str) -> list[App]:
        value = state.value if isinstance(state, AppState) else state
        return _apps(await self.client.call("app.query", [[["state", "=", value]]]))

    async def query_by_catalog(self, catalog: str) -> list[App]:
        return _apps(await self.client.call("app.query", [[["catalog", "=", catalog]]]))

    async def query_with_filters(
        self, filters: list[list[Any]], options: AppQueryOptions | None = None
    ) -> list[App]:
        """Query with filters of the form ``[["field", "operator", value], ...]``."""
        params: list[Any] = [filters]
        if options is not None:
            params.append(options.to_dict())
        return _apps(await self.client.call("app.query", params))

    async def list_running(self) -> list[App]:
        return await self.query_by_state(AppState.RUNNING)

    async def list_stopped(self) -> list[App]:
        return await self.query_by_state(AppState.STOPPED)

    async def list_deploying(self) -> list[App]:
        return await self.query_by_state(AppState.DEPLOYING)

    async def list_crashed(self) -> list[App]:
        return await self.query_by_state(AppState.CRASHED)