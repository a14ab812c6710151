"""Exceptions raised by the TrueNAS middleware client."""

from __future__ import annotations

from typing import Any


class TrueNASError(Exception):
    """Base class for every error raised by this package."""


class APIError(TrueNASError):
    """An error object returned by the middleware in reply to a call."""

    def __init__(
        self,
        message: str = "",
        code: int = 0,
        reason: str = "",
        error_type: str = "",
    ) -> None:
        self.message = message
        self.code = code
        self.reason = reason
        self.error_type = error_type
        super().__init__(self._describe())

    def _describe(self) -> str:
        parts = []
        if self.code > 0:
            parts.append(f"code: {self.code}")
        if self.message:
            parts.append(f"message: {self.message}")
        if self.reason:
            parts.append(f"reason: {self.reason}")
        if self.error_type:
            parts.append(f"type: {self.error_type}")
        if not parts:
            return "TrueNAS API error"
        return f"TrueNAS API error ({', '.join(parts)})"

    def __str__(self) -> str:
        return self._describe()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> APIError:
        """Build an error from its wire representation."""
        code = data.get("error") or 0
        if not isinstance(code, int) or isinstance(code, bool):
            try:
                code = int(code)
            except (TypeError, ValueError):
                code = 0
        return cls(
            message=data.get("message") or "",
            code=code,
            reason=data.get("reason") or "",
            error_type=data.get("errorType") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation, leaving out empty fields."""
        out: dict[str, Any] = {}
        if self.message:
            out["message"] = self.message
        if self.code:
            out["error"] = self.code
        if self.reason:
            out["reason"] = self.reason
        if self.error_type:
            out["errorType"] = self.error_type
        return out


class NotFoundError(TrueNASError):
    """A lookup matched no resource."""

    def __init__(self, resource: str, identifier: str) -> None:
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class NotConnectedError(TrueNASError):
    """The client has no live connection to send on."""

    def __init__(self, message: str = "not connected") -> None:
        super().__init__(message)


class ClientClosedError(TrueNASError):
    """The client was closed while a call was waiting for its reply."""

    def __init__(self, message: str = "client closed") -> None:
        super().__init__(message)


class JobFailedError(TrueNASError):
    """A background job finished in a failed state."""

    def __init__(self, job_id: int, error: str, method: str = "") -> None:
        self.job_id = job_id
        self.error = error
        self.method = method
        label = f"job {job_id} ({method})" if method else f"job {job_id}"
        super().__init__(f"{label} failed: {error}")