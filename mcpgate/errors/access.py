"""Origin rejection raised by the security gate."""

from __future__ import annotations

from .base import TransportError


class AccessDeniedError(TransportError):
    """Raised when a request's ``Origin`` is not on the allow-list."""

    status_code = 403

    def __init__(self, origin: str) -> None:
        super().__init__(
            "access_denied",
            f"Forbidden: origin '{origin}' is not allowed",
            details={"origin": origin},
        )
        self.origin = origin


__all__ = ["AccessDeniedError"]
