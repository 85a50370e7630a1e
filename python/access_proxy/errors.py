from __future__ import annotations

from typing import Optional


class AccessProxyError(Exception):
    """Base class for errors raised by access_proxy."""


class InvalidArgumentError(AccessProxyError, TypeError):
    """Raised when a proxy is pointed at something that is not an object."""


class NoSuchMemberError(AccessProxyError, AttributeError):
    """Raised when none of the candidate names exist on the target."""

    def __init__(self, obj: object, name: str, candidates: tuple[str, ...]) -> None:
        tried = ", ".join(repr(c) for c in candidates)
        super().__init__(
            f"{type(obj).__name__!r} object has no member {name!r} (tried {tried})",
            name=name,
            obj=obj,
        )
        self.candidates = candidates


class RebindError(AccessProxyError, TypeError):
    """Raised when a callable cannot be rebound to a target."""


class UnboundProxyError(AccessProxyError, AttributeError):
    def __init__(self, name: Optional[str] = None) -> None:
        if name is None:
            message = "proxy has no target"
        else:
            message = f"proxy has no target to resolve {name!r}"
        super().__init__(message, name=name)
