"""Mutable reference cell."""

from __future__ import annotations


class Ref:
    """Holds a value that a callee may replace in place.

    AccessProxy.bind() swaps ``ref.value`` for its rebound version, so every
    holder of the same Ref sees the new function.
    """

    __slots__ = ("value",)

    def __init__(self, value=None):
        self.value = value

    def __call__(self, *args, **kwargs):
        return self.value(*args, **kwargs)

    def __repr__(self):
        return f"Ref({self.value!r})"
