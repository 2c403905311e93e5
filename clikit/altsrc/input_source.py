"""Alternate input sources that supply flag values from loaded data."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import timedelta
from fractions import Fraction
from typing import Any

_MISSING = object()

_UNIT_NANOSECONDS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_DURATION_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


class InputSourceContext(ABC):
    """A source of values that flags can be initialised from."""

    @abstractmethod
    def source(self) -> str:
        """Return an identifier for the source, such as a file path."""

    @abstractmethod
    def int(self, name: str) -> int:
        """Return the integer stored under name."""

    @abstractmethod
    def duration(self, name: str) -> timedelta:
        """Return the duration stored under name."""

    @abstractmethod
    def float64(self, name: str) -> float:
        """Return the float stored under name."""

    @abstractmethod
    def string(self, name: str) -> str:
        """Return the string stored under name."""

    @abstractmethod
    def string_slice(self, name: str) -> list[str] | None:
        """Return the list of strings stored under name."""

    @abstractmethod
    def int_slice(self, name: str) -> list[int] | None:
        """Return the list of integers stored under name."""

    @abstractmethod
    def generic(self, name: str) -> Any:
        """Return the generic value stored under name."""

    @abstractmethod
    def bool(self, name: str) -> bool:
        """Return the boolean stored under name."""


def _incorrect_type(name: str, expected: str, value: Any) -> TypeError:
    actual = "" if value is None else type(value).__name__
    return TypeError(
        f"Mismatched type for flag '{name}'. Expected '{expected}' but actual is '{actual}'"
    )


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_generic(value: Any) -> bool:
    return callable(getattr(value, "set", None))


def _parse_duration(text: str) -> timedelta:
    body = text
    negative = False
    if body and body[0] in "+-":
        negative = body[0] == "-"
        body = body[1:]
    if body == "0":
        return timedelta(0)
    if not body:
        raise ValueError(f"invalid duration {text!r}")
    total = Fraction(0)
    pos = 0
    while pos < len(body):
        match = _DURATION_COMPONENT.match(body, pos)
        if match is None:
            raise ValueError(f"invalid duration {text!r}")
        total += Fraction(match.group(1).rstrip(".") or "0") * _UNIT_NANOSECONDS[match.group(2)]
        pos = match.end()
    microseconds = int(total) // 1000
    return timedelta(microseconds=-microseconds if negative else microseconds)


def _cast_duration(name: str, value: Any) -> timedelta:
    if isinstance(value, timedelta):
        return value
    if isinstance(value, str):
        try:
            return _parse_duration(value)
        except ValueError:
            pass
    raise _incorrect_type(name, "duration", value)


def _nested_value(name: str, tree: dict) -> Any:
    sections = name.split(".")
    if len(sections) < 2:
        return _MISSING
    node = tree
    for section in sections[:-1]:
        child = node.get(section, _MISSING)
        if not isinstance(child, dict):
            return _MISSING
        node = child
    return node.get(sections[-1], _MISSING)


@dataclass
class MapInputSource(InputSourceContext):
    """An input source backed by a (possibly nested) mapping."""

    file: str = ""
    value_map: dict = field(default_factory=dict)

    def _lookup(self, name: str) -> Any:
        if name in self.value_map:
            return self.value_map[name]
        return _nested_value(name, self.value_map)

    def source(self) -> str:
        return self.file

    def int(self, name: str) -> int:
        value = self._lookup(name)
        if value is _MISSING:
            return 0
        if not _is_int(value):
            raise _incorrect_type(name, "int", value)
        return value

    def duration(self, name: str) -> timedelta:
        value = self._lookup(name)
        if value is _MISSING:
            return timedelta(0)
        return _cast_duration(name, value)

    def float64(self, name: str) -> float:
        value = self._lookup(name)
        if value is _MISSING:
            return 0.0
        if not isinstance(value, float):
            raise _incorrect_type(name, "float64", value)
        return value

    def string(self, name: str) -> str:
        value = self._lookup(name)
        if value is _MISSING:
            return ""
        if not isinstance(value, str):
            raise _incorrect_type(name, "string", value)
        return value

    def string_slice(self, name: str) -> list[str] | None:
        value = self._lookup(name)
        if value is _MISSING:
            return None
        if not isinstance(value, (list, tuple)):
            raise _incorrect_type(name, "[]interface{}", value)
        result = []
        for index, item in enumerate(value):
            if not isinstance(item, str):
                raise _incorrect_type(f"{name}[{index}]", "string", item)
            result.append(item)
        return result

    def int_slice(self, name: str) -> list[int] | None:
        value = self._lookup(name)
        if value is _MISSING:
            return None
        if not isinstance(value, (list, tuple)):
            raise _incorrect_type(name, "[]interface{}", value)
        result = []
        for index, item in enumerate(value):
            if not _is_int(item):
                raise _incorrect_type(f"{name}[{index}]", "int", item)
            result.append(item)
        return result

    def generic(self, name: str) -> Any:
        value = self._lookup(name)
        if value is _MISSING:
            return None
        if not _is_generic(value):
            raise _incorrect_type(name, "cli.Generic", value)
        return value

    def bool(self, name: str) -> bool:
        value = self._lookup(name)
        if value is _MISSING:
            return False
        if not isinstance(value, bool):
            raise _incorrect_type(name, "bool", value)
        return value


def default_input_source() -> MapInputSource:
    """Return an empty input source with no backing file."""
    return MapInputSource(file="", value_map={})