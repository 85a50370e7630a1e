"""Member-name resolution and function rebinding under an access context.

An access context is a class name. Inside the body of class ``C`` the
compiler rewrites every private-form identifier ``__x`` to ``_C__x``; the
helpers here apply the same rule at runtime so code outside ``C`` can reach
its private members.
"""

from __future__ import annotations

import inspect
import numbers
from types import CodeType, FunctionType, MethodType
from typing import Any, Callable

from .errors import NoSuchMemberError, RebindError

_MISSING = object()

# Values of these kinds are data, not objects with members of their own.
_NON_OBJECT_TYPES = (
    numbers.Number,
    str,
    bytes,
    bytearray,
    list,
    tuple,
    dict,
    set,
    frozenset,
)


def is_object(value: object) -> bool:
    if value is None:
        return False
    return not isinstance(value, _NON_OBJECT_TYPES)


def context_of(target: object) -> str:
    if isinstance(target, type):
        return target.__name__
    return type(target).__name__


def is_dunder_name(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def is_private_name(name: str) -> bool:
    return name.startswith("__") and not name.endswith("__")


def mangle(name: str, context: str) -> str:
    """Return ``name`` as it is stored when written inside class ``context``."""
    if not is_private_name(name):
        return name
    owner = context.lstrip("_")
    if not owner:
        # A class named only with underscores does not mangle.
        return name
    return f"_{owner}{name}"


def declared_name(attr: str, context: str) -> str:
    """Inverse of mangle() for members private to ``context``."""
    owner = context.lstrip("_")
    prefix = f"_{owner}__"
    if owner and attr.startswith(prefix) and not attr.endswith("__"):
        return attr[len(owner) + 1 :]
    return attr


def candidate_names(name: str, context: str) -> tuple[str, ...]:
    """Stored names that ``name`` may refer to, in lookup order.

    Names written with leading underscores are explicit about their level and
    resolve to a single candidate. A bare name is tried as public, then
    protected, then private to ``context``.
    """
    if name.startswith("_"):
        return (mangle(name, context),)
    candidates = (name, f"_{name}", mangle(f"__{name}", context))
    return tuple(dict.fromkeys(candidates))


def has_member(obj: object, attr: str) -> bool:
    # getattr_static also sees __slots__ members that have not been set yet.
    return inspect.getattr_static(obj, attr, _MISSING) is not _MISSING


def resolve_member(obj: object, name: str, context: str) -> str:
    """Stored name a write or delete of ``name`` goes to.

    Members only a custom ``__getattr__`` knows about are found with
    hasattr() once nothing is declared statically.
    """
    candidates = candidate_names(name, context)
    for candidate in candidates:
        if has_member(obj, candidate):
            return candidate
    for candidate in candidates:
        if hasattr(obj, candidate):
            return candidate
    raise NoSuchMemberError(obj, name, candidates)


def lookup_member(obj: object, name: str, context: str) -> Any:
    """Read ``name`` from ``obj``, evaluating the member exactly once."""
    candidates = candidate_names(name, context)
    for candidate in candidates:
        if has_member(obj, candidate):
            return getattr(obj, candidate)
    for candidate in candidates:
        try:
            return getattr(obj, candidate)
        except AttributeError:
            continue
    raise NoSuchMemberError(obj, name, candidates)


def _mangle_code(code: CodeType, context: str) -> CodeType:
    names = tuple(mangle(name, context) for name in code.co_names)
    consts = tuple(
        _mangle_code(const, context) if isinstance(const, CodeType) else const
        for const in code.co_consts
    )
    return code.replace(co_names=names, co_consts=consts)


def rebind(func: Callable[..., Any], target: object, context: str) -> MethodType:
    """Copy ``func`` so it runs as a method of ``target`` inside ``context``.

    Private-form names referenced by the function body, attribute and global
    lookups alike, are mangled as if the function had been written in the
    body of the context class. The original function is left untouched.
    """
    if isinstance(func, MethodType):
        func = func.__func__
    if not isinstance(func, FunctionType):
        raise RebindError(
            f"cannot rebind {type(func).__name__!r} object; expected a Python function"
        )

    rebound = FunctionType(
        _mangle_code(func.__code__, context),
        func.__globals__,
        func.__name__,
        func.__defaults__,
        func.__closure__,
    )
    rebound.__kwdefaults__ = func.__kwdefaults__
    rebound.__qualname__ = func.__qualname__
    rebound.__doc__ = func.__doc__
    rebound.__dict__.update(func.__dict__)
    return MethodType(rebound, target)
