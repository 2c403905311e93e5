"""An input source backed by JSON data."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import timedelta
from typing import IO, Any

from .input_source import InputSourceContext, default_input_source
from .loaders import load_data_from


def _type_name(value: Any) -> str:
    return type(value).__name__


def _unexpected(value: Any, name: str) -> TypeError:
    return TypeError(f'unexpected type {_type_name(value)} for "{name}"')


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _get_value(key: str, mapping: dict) -> Any:
    working: Any = mapping
    value: Any = None
    keys = key.split(".")
    for index, part in enumerate(keys):
        if not isinstance(working, dict) or part not in working:
            raise KeyError(f'missing key "{key}"')
        value = working[part]
        if not isinstance(value, dict) and index < len(keys) - 1:
            raise TypeError(
                f'unexpected intermediate value at "{part}" segment of "{key}": '
                f"{_type_name(value)}"
            )
        working = value
    return value


@dataclass
class JsonSource(InputSourceContext):
    """Values read from a deserialized JSON object."""

    file: str = ""
    deserialized: dict = field(default_factory=dict)

    def _value(self, name: str) -> Any:
        return _get_value(name, self.deserialized)

    def source(self) -> str:
        return self.file

    def int(self, name: str) -> int:
        value = self._value(name)
        if not _is_number(value):
            raise _unexpected(value, name)
        return int(value)

    def duration(self, name: str) -> timedelta:
        value = self._value(name)
        if not isinstance(value, timedelta):
            raise _unexpected(value, name)
        return value

    def float64(self, name: str) -> float:
        value = self._value(name)
        if not _is_number(value):
            raise _unexpected(value, name)
        return float(value)

    def string(self, name: str) -> str:
        value = self._value(name)
        if not isinstance(value, str):
            raise _unexpected(value, name)
        return value

    def string_slice(self, name: str) -> list[str]:
        value = self._value(name)
        if not isinstance(value, list):
            raise _unexpected(value, name)
        for item in value:
            if not isinstance(item, str):
                raise TypeError(
                    f'unexpected item type {_type_name(item)} in list for "{name}"'
                )
        return list(value)

    def int_slice(self, name: str) -> list[int]:
        value = self._value(name)
        if not isinstance(value, list):
            raise _unexpected(value, name)
        for item in value:
            if not isinstance(item, int) or isinstance(item, bool):
                raise TypeError(
                    f'unexpected item type {_type_name(item)} in list for "{name}"'
                )
        return list(value)

    def generic(self, name: str) -> Any:
        value = self._value(name)
        if not callable(getattr(value, "set", None)):
            raise _unexpected(value, name)
        return value

    def bool(self, name: str) -> bool:
        value = self._value(name)
        if not isinstance(value, bool):
            raise _unexpected(value, name)
        return value


def new_json_source(data: bytes | str) -> JsonSource:
    """Create a source from raw JSON text."""
    loaded = json.loads(data)
    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise TypeError(f"cannot load JSON {_type_name(loaded)} into an object")
    return JsonSource(deserialized=loaded)


def new_json_source_from_file(path: str) -> JsonSource:
    """Create a source from a JSON file or URL."""
    return new_json_source(load_data_from(path))


def new_json_source_from_reader(reader: IO[Any]) -> JsonSource:
    """Create a source from a readable stream of JSON."""
    return new_json_source(reader.read())


def new_json_source_from_flag_func(flag: str) -> Callable[[Any], InputSourceContext]:
    """Return a factory that loads JSON from the file named by a flag."""

    def create(context: Any) -> InputSourceContext:
        if context.is_set(flag):
            return new_json_source_from_file(context.string(flag))
        return default_input_source()

    return create