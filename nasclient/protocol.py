"""Wire messages of the middleware websocket protocol and JSON helpers."""

from __future__ import annotations

import dataclasses
import json
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

from .errors import APIError, TrueNASError

_RFC3339 = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[Tt ](\d{2}):(\d{2}):(\d{2})(\.\d+)?([Zz]|[+-]\d{2}:\d{2})?$"
)


def _decode_raw(label: str, raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise TrueNASError(f"unmarshal {label}: {raw}: {exc}") from exc


@dataclass
class Message:
    """One frame exchanged with the middleware.

    ``result`` and ``fields`` hold raw JSON text, as received.
    """

    id: str = ""
    msg: str = ""
    method: str = ""
    params: Any = None
    result: str | None = None
    error: APIError | None = None
    collection: str = ""
    fields: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Message:
        error = data.get("error")
        if isinstance(error, dict):
            api_error: APIError | None = APIError.from_dict(error)
        elif error is None:
            api_error = None
        else:
            api_error = APIError(message=str(error))
        return cls(
            id=str(data.get("id") or ""),
            msg=data.get("msg") or "",
            method=data.get("method") or "",
            params=data.get("params"),
            result=json.dumps(data["result"]) if "result" in data else None,
            error=api_error,
            collection=data.get("collection") or "",
            fields=json.dumps(data["fields"]) if "fields" in data else None,
        )

    @classmethod
    def from_json(cls, text: str | bytes) -> Message:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise TrueNASError(f"decode message: {exc}") from exc
        if not isinstance(data, dict):
            raise TrueNASError("decode message: not a JSON object")
        return cls.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.id:
            out["id"] = self.id
        if self.msg:
            out["msg"] = self.msg
        if self.method:
            out["method"] = self.method
        if self.params is not None:
            out["params"] = self.params
        if self.result:
            out["result"] = _decode_raw("result", self.result)
        if self.error is not None:
            out["error"] = self.error.to_dict()
        if self.collection:
            out["collection"] = self.collection
        if self.fields:
            out["fields"] = _decode_raw("fields", self.fields)
        return out

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"), default=_json_default)

    def decode_result(self) -> Any:
        """Return the decoded result, or None when the message carries none."""
        if not self.result:
            return None
        return _decode_raw("result", self.result)


def parse_datetime(value: Any) -> datetime | None:
    """Parse an RFC 3339 string or a ``{"$date": ms}`` object into an aware datetime."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, dict) and "$date" in value:
        return datetime.fromtimestamp(value["$date"] / 1000, tz=timezone.utc)
    if isinstance(value, str):
        match = _RFC3339.match(value.strip())
        if not match:
            raise ValueError(f"invalid timestamp: {value!r}")
        year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
        fraction, zone = match.group(7), match.group(8)
        micro = int((fraction[1:] + "000000")[:6]) if fraction else 0
        if not zone or zone in ("Z", "z"):
            tz = timezone.utc
        else:
            sign = -1 if zone[0] == "-" else 1
            tz = timezone(sign * timedelta(hours=int(zone[1:3]), minutes=int(zone[4:6])))
        return datetime(year, month, day, hour, minute, second, micro, tzinfo=tz)
    raise ValueError(f"invalid timestamp: {value!r}")


def format_datetime(value: datetime) -> str:
    """Format a datetime as RFC 3339; naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.strftime("%Y-%m-%dT%H:%M:%S")
    if value.microsecond:
        text += f".{value.microsecond:06d}".rstrip("0")
    offset = value.utcoffset() or timedelta(0)
    if not offset:
        return text + "Z"
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return format_datetime(value)
    if isinstance(value, Enum):
        return value.value
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    raise TypeError(f"cannot encode {type(value).__name__}")


def try_dumps(value: Any) -> str:
    """Encode a value as compact JSON, or return an empty string if it cannot be."""
    try:
        return json.dumps(value, separators=(",", ":"), default=_json_default)
    except (TypeError, ValueError):
        return ""