from __future__ import annotations

from .errors import (
    AccessProxyError,
    InvalidArgumentError,
    NoSuchMemberError,
    RebindError,
    UnboundProxyError,
)
from .proxy import AccessProxy
from .ref import Ref


def _resolve_version() -> str:
    try:
        from importlib.metadata import version

        return version("access-proxy")
    except Exception:  # pragma: no cover - during development
        return "0.0.0"


def __getattr__(name: str):
    if name == "__version__":
        value = _resolve_version()
        globals()["__version__"] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + ["__version__"])


__all__ = [
    "AccessProxy",
    "AccessProxyError",
    "InvalidArgumentError",
    "NoSuchMemberError",
    "RebindError",
    "Ref",
    "UnboundProxyError",
    "__version__",
]
