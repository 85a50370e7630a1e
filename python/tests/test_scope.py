from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
PYTHON_DIR = ROOT / "python"
sys.path.insert(0, str(PYTHON_DIR))

from access_proxy.errors import NoSuchMemberError, RebindError  # noqa: E402
from access_proxy.scope import (  # noqa: E402
    candidate_names,
    context_of,
    declared_name,
    is_object,
    lookup_member,
    mangle,
    rebind,
    resolve_member,
)


class Gauge:
    def __init__(self, scale: int) -> None:
        self.__scale = scale
        self.label = "gauge"


class Labeler:
    def describe(self):
        return f"<{self.label}>"


@pytest.mark.parametrize(
    ("name", "context", "expected"),
    [
        pytest.param("__x", "Gauge", "_Gauge__x", id="private"),
        pytest.param("__x", "_Hidden", "_Hidden__x", id="context-leading-underscore"),
        pytest.param("__x", "___", "__x", id="underscore-only-context"),
        pytest.param("_x", "Gauge", "_x", id="protected"),
        pytest.param("x", "Gauge", "x", id="public"),
        pytest.param("__init__", "Gauge", "__init__", id="dunder"),
    ],
)
def test_mangle(name: str, context: str, expected: str) -> None:
    assert mangle(name, context) == expected


@pytest.mark.parametrize(
    ("attr", "context", "expected"),
    [
        pytest.param("_Gauge__scale", "Gauge", "__scale", id="own-private"),
        pytest.param("_Other__scale", "Gauge", "_Other__scale", id="other-private"),
        pytest.param("_Gauge__init__", "Gauge", "_Gauge__init__", id="dunder-suffix"),
        pytest.param("label", "Gauge", "label", id="public"),
    ],
)
def test_declared_name(attr: str, context: str, expected: str) -> None:
    assert declared_name(attr, context) == expected


def test_candidate_names() -> None:
    assert candidate_names("scale", "Gauge") == ("scale", "_scale", "_Gauge__scale")
    assert candidate_names("_scale", "Gauge") == ("_scale",)
    assert candidate_names("__scale", "Gauge") == ("_Gauge__scale",)
    assert candidate_names("scale", "___") == ("scale", "_scale", "__scale")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        pytest.param(Gauge(1), True, id="instance"),
        pytest.param(Gauge, True, id="class"),
        pytest.param(pytest, True, id="module"),
        pytest.param(None, False, id="none"),
        pytest.param(1.5, False, id="float"),
        pytest.param(b"raw", False, id="bytes"),
        pytest.param((1,), False, id="tuple"),
        pytest.param(frozenset(), False, id="frozenset"),
    ],
)
def test_is_object(value: object, expected: bool) -> None:
    assert is_object(value) is expected


def test_context_of() -> None:
    assert context_of(Gauge(1)) == "Gauge"
    assert context_of(Gauge) == "Gauge"


def test_resolve_member_prefers_public_name() -> None:
    gauge = Gauge(3)
    gauge._label = "protected"

    assert resolve_member(gauge, "label", "Gauge") == "label"
    assert resolve_member(gauge, "scale", "Gauge") == "_Gauge__scale"

    with pytest.raises(NoSuchMemberError) as excinfo:
        resolve_member(gauge, "scale", "Other")
    assert excinfo.value.candidates == ("scale", "_scale", "_Other__scale")
    assert excinfo.value.obj is gauge


def test_rebind_mangles_nested_code() -> None:
    def scaled(self, values, factor=1, *, offset=0):
        return [v * factor * self.__scale + offset for v in values]

    def via_lambda(self):
        return (lambda: self.__scale)()

    gauge = Gauge(10)

    assert rebind(scaled, gauge, "Gauge")([1, 2]) == [10, 20]
    assert rebind(scaled, gauge, "Gauge")([1], 2, offset=1) == [21]
    assert rebind(via_lambda, gauge, "Gauge")() == 10


def test_rebind_preserves_closure_and_metadata() -> None:
    extra = 5

    def add_extra(self):
        """Add the captured value."""
        return self.__scale + extra

    add_extra.marker = "kept"
    bound = rebind(add_extra, Gauge(1), "Gauge")

    assert bound() == 6
    assert bound.__name__ == "add_extra"
    assert bound.__doc__ == "Add the captured value."
    assert bound.__func__.marker == "kept"
    assert add_extra.__code__.co_names == ("__scale",)


def test_rebind_unwraps_bound_methods() -> None:
    gauge = Gauge(1)

    bound = rebind(Labeler().describe, gauge, "Gauge")

    assert bound.__self__ is gauge
    assert bound() == "<gauge>"


@pytest.mark.parametrize(
    "func",
    [
        pytest.param(len, id="builtin"),
        pytest.param(str.upper, id="method-descriptor"),
        pytest.param(Gauge, id="class"),
    ],
)
def test_rebind_rejects_non_functions(func: object) -> None:
    with pytest.raises(RebindError):
        rebind(func, Gauge(1), "Gauge")


class Counter:
    def __init__(self) -> None:
        self.reads = 0

    def __getattr__(self, name):
        if name == "_tick":
            self.reads += 1
            return self.reads
        raise AttributeError(name)


def test_lookup_member_falls_back_to_dynamic_attributes() -> None:
    counter = Counter()

    assert lookup_member(counter, "tick", "Counter") == 1
    assert counter.reads == 1
    assert resolve_member(counter, "tick", "Counter") == "_tick"

    with pytest.raises(NoSuchMemberError):
        lookup_member(counter, "tock", "Counter")


def test_lookup_member_prefers_declared_members() -> None:
    gauge = Gauge(4)

    assert lookup_member(gauge, "scale", "Gauge") == 4
    assert lookup_member(gauge, "label", "Gauge") == "gauge"
