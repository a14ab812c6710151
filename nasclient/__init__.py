"""Wire messages, errors, typed records and async API wrappers for the TrueNAS middleware."""

__version__ = "0.1.0"

__all__ = [
    "alert",
    "apikey",
    "app",
    "auth",
    "boot",
    "certificate",
    "errors",
    "protocol",
]