"""Deterministic, human readable rendering of values for failure messages."""

from __future__ import annotations

import dataclasses
import re
from typing import Any

_SCALARS = (int, float, complex, str, bytes, bool, type(None))


def render(value: Any) -> str:
    """Render ``value`` the same way on every run.

    Examples:
        >>> render({"a": [1, 2]})
        "{ 'a': [ 1, 2 ] }"
        >>> render(re.compile("ll"))
        '/ll/'
    """
    return _render(value, set())


def _render(value: Any, seen: set[int]) -> str:
    if isinstance(value, _SCALARS):
        return repr(value)
    if isinstance(value, re.Pattern):
        return f"/{value.pattern}/"
    if isinstance(value, type):
        return value.__name__
    if isinstance(value, BaseException):
        return f"{type(value).__name__}({', '.join(_render(a, seen) for a in value.args)})"

    if id(value) in seen:
        return "<circular>"
    seen = seen | {id(value)}

    if isinstance(value, dict):
        items = [f"{_render(k, seen)}: {_render(v, seen)}" for k, v in value.items()]
        return _wrap("{", items, "}")
    if isinstance(value, list):
        return _wrap("[", [_render(v, seen) for v in value], "]")
    if isinstance(value, tuple):
        return _wrap("(", [_render(v, seen) for v in value], ")")
    if isinstance(value, (set, frozenset)):
        return _wrap("{", sorted(_render(v, seen) for v in value), "}")
    if dataclasses.is_dataclass(value):
        fields = [
            f"{f.name}: {_render(getattr(value, f.name), seen)}"
            for f in dataclasses.fields(value)
        ]
        return f"{type(value).__name__} {_wrap('{', fields, '}')}"
    if callable(value):
        return getattr(value, "__qualname__", None) or repr(value)
    if type(value).__repr__ is object.__repr__ and hasattr(value, "__dict__"):
        fields = [f"{k}: {_render(v, seen)}" for k, v in vars(value).items()]
        return f"{type(value).__name__} {_wrap('{', fields, '}')}"
    return repr(value)


def _wrap(opening: str, items: list[str], closing: str) -> str:
    if not items:
        return f"{opening}{closing}"
    return f"{opening} {', '.join(items)} {closing}"
