"""Proxy that reads, writes and calls members of an object ignoring their visibility."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Union

from .errors import InvalidArgumentError, UnboundProxyError
from .ref import Ref
from .scope import (
    context_of,
    declared_name,
    is_dunder_name,
    is_object,
    lookup_member,
    rebind,
    resolve_member,
)

__all__ = ["AccessProxy"]

logger = logging.getLogger(__name__)

_OWN_SLOTS = frozenset(
    {
        "_AccessProxy__target",
        "_AccessProxy__context",
        "_AccessProxy__getter",
        "_AccessProxy__setter",
        "_AccessProxy__caller",
    }
)


class AccessProxy:
    """Stand-in for an object that exposes its protected and private members.

    Attribute reads, writes and method calls on the proxy are forwarded to
    the target. A member ``x`` is found whether it is declared as ``x``,
    ``_x`` or ``__x`` in the context class; ``__x`` always means the member
    private to the context class. Members declared on the class or instance
    win over ones only a custom ``__getattr__`` on the target provides.

    ``proxy.__x`` written inside a class body is mangled by the compiler to
    that class's name before the proxy sees it. From inside a class, use
    the bare name (``proxy.x``) or ``proxy.get_value("__x")``.

    Reads go through the getter handle, writes through the setter handle.
    The caller handle backs call(); ``proxy.method(...)`` is a getter read
    of the bound method followed by an ordinary call.

    The three accessor handles are built on first use and dropped whenever
    the target changes. Initialization is not atomic: concurrent first use
    may build a handle twice, which is harmless since the copies behave the
    same. Share a proxy across threads only under external locking.
    """

    __slots__ = ("__target", "__context", "__getter", "__setter", "__caller")

    def __init__(self, target: object = None) -> None:
        self.__target = None
        self.__context: Optional[str] = None
        self.__getter: Optional[Callable[[str], Any]] = None
        self.__setter: Optional[Callable[[str, Any], None]] = None
        self.__caller: Optional[Callable[[str, tuple, dict], Any]] = None
        if is_object(target):
            self.set_object(target)

    def get_object(self) -> Any:
        return self.__target

    def get_object_context(self) -> Optional[str]:
        return self.__context

    def set_object(self, target: object, context: Union[str, type, None] = None) -> None:
        """Point the proxy at ``target``.

        ``context`` names the class whose private members are reachable;
        it defaults to the target's own class. Pass a base class (or its
        name) to reach members a parent declared private.
        """
        if not is_object(target):
            raise InvalidArgumentError(
                f"set_object() argument 1 must be an object, not {type(target).__name__!r}"
            )
        if context is None:
            context = context_of(target)
        elif isinstance(context, type):
            context = context.__name__
        elif not isinstance(context, str):
            raise InvalidArgumentError(
                f"set_object() argument 2 must be a str or class, not {type(context).__name__!r}"
            )

        self.__target = target
        self.__context = context
        self.__getter = self.__setter = self.__caller = None

    def _require_target(self) -> object:
        if self.__target is None:
            raise UnboundProxyError()
        return self.__target

    def _get_getter(self) -> Callable[[str], Any]:
        if self.__getter is None:
            target = self._require_target()
            context = self.__context

            def getter(name: str) -> Any:
                return lookup_member(target, name, context)

            self.__getter = getter
        return self.__getter

    def _get_setter(self) -> Callable[[str, Any], None]:
        if self.__setter is None:
            target = self._require_target()
            context = self.__context

            def setter(name: str, value: Any) -> None:
                setattr(target, resolve_member(target, name, context), value)

            self.__setter = setter
        return self.__setter

    def _get_caller(self) -> Callable[[str, tuple, dict], Any]:
        if self.__caller is None:
            target = self._require_target()
            context = self.__context

            def caller(name: str, args: tuple, kwargs: dict) -> Any:
                return lookup_member(target, name, context)(*args, **kwargs)

            self.__caller = caller
        return self.__caller

    def get_value(self, name: str) -> Any:
        return self._get_getter()(name)

    def set_value(self, name: str, value: Any) -> "AccessProxy":
        self._get_setter()(name, value)
        return self

    def call(self, name: str, /, *args: Any, **kwargs: Any) -> Any:
        return self._get_caller()(name, args, kwargs)

    def run(self, func: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Any:
        """Call ``func`` as if it were a method of the target's context class.

        The target is passed as the first argument and ``self.__x`` inside
        ``func`` reaches the context's private ``__x``. ``func`` itself is
        not modified. Errors propagate.
        """
        bound = rebind(func, self._require_target(), self.__context)
        return bound(*args, **kwargs)

    def bind(self, ref: Ref) -> bool:
        """Replace ``ref.value`` with a copy bound to the target.

        Returns False, leaving ``ref`` untouched, when the value cannot be
        rebound.
        """
        try:
            ref.value = rebind(ref.value, self._require_target(), self.__context)
        except Exception:
            logger.debug("could not bind %r to %r", ref, self.__target, exc_info=True)
            return False
        return True

    def __getattr__(self, name: str) -> Any:
        # Reached for unset own slots and protocol lookups; neither is forwarded.
        if name in _OWN_SLOTS or is_dunder_name(name):
            raise AttributeError(
                f"{type(self).__name__!r} object has no attribute {name!r}"
            )
        return self.get_value(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _OWN_SLOTS or is_dunder_name(name):
            object.__setattr__(self, name, value)
            return
        self.set_value(name, value)

    def __delattr__(self, name: str) -> None:
        if name in _OWN_SLOTS or is_dunder_name(name):
            object.__delattr__(self, name)
            return
        target = self._require_target()
        delattr(target, resolve_member(target, name, self.__context))

    def __dir__(self) -> list[str]:
        own = {name for name in object.__dir__(self) if not name.startswith("_")}
        if self.__target is None:
            return sorted(own)
        context = self.__context
        members = {declared_name(attr, context) for attr in dir(self.__target)}
        return sorted(own | members)

    def __repr__(self) -> str:
        if self.__target is None:
            return f"{type(self).__name__}(<unbound>)"
        return f"{type(self).__name__}({self.__target!r}, context={self.__context!r})"
