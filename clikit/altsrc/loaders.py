"""Loading YAML and TOML files into map-backed input sources."""

from __future__ import annotations

import os
import tomllib
import urllib.request
from collections.abc import Callable
from typing import Any
from urllib.parse import urlparse

import yaml

from .input_source import InputSourceContext, MapInputSource, default_input_source


def load_data_from(file_path: str) -> bytes:
    """Read raw bytes from an http(s) URL or a local file path."""
    parsed = urlparse(file_path)
    if parsed.netloc:
        if parsed.scheme in ("http", "https"):
            with urllib.request.urlopen(file_path) as response:
                return response.read()
        raise ValueError(f"scheme of {file_path} is unsupported")
    if parsed.path or (os.name == "nt" and "\\" in file_path):
        if not os.path.exists(file_path):
            raise FileNotFoundError(
                f"Cannot read from file: '{file_path}' because it does not exist."
            )
        with open(file_path, "rb") as handle:
            return handle.read()
    raise ValueError(f"unable to determine how to load from path {file_path}")


def _read_yaml(file_path: str) -> dict:
    loaded = yaml.safe_load(load_data_from(file_path))
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise TypeError(f"cannot load {type(loaded).__name__} into a mapping")
    return loaded


def _convert_toml(table: dict) -> dict:
    result: dict = {}
    for key, value in table.items():
        if isinstance(value, dict):
            result[key] = _convert_toml(value)
        elif isinstance(value, (bool, str, int, float, list)):
            result[key] = value
        else:
            raise TypeError(f"Unsupported: type = {type(value).__name__}")
    return result


def _read_toml(file_path: str) -> dict:
    data = load_data_from(file_path)
    return _convert_toml(tomllib.loads(data.decode("utf-8")))


_LOAD_ERRORS = (OSError, ValueError, TypeError, UnicodeDecodeError, yaml.YAMLError)


def new_yaml_source_from_file(file: str) -> MapInputSource:
    """Create an input source from a YAML file or URL."""
    try:
        values = _read_yaml(file)
    except _LOAD_ERRORS as err:
        raise ValueError(f"Unable to load Yaml file '{file}': inner error: \n'{err}'") from err
    return MapInputSource(file=file, value_map=values)


def new_yaml_source_from_flag_func(
    flag_file_name: str,
) -> Callable[[Any], InputSourceContext]:
    """Return a factory that loads YAML from the file named by a flag."""

    def create(context: Any) -> InputSourceContext:
        if context.is_set(flag_file_name):
            return new_yaml_source_from_file(context.string(flag_file_name))
        return default_input_source()

    return create


def new_toml_source_from_file(file: str) -> MapInputSource:
    """Create an input source from a TOML file or URL."""
    try:
        values = _read_toml(file)
    except _LOAD_ERRORS as err:
        raise ValueError(f"Unable to load TOML file '{file}': inner error: \n'{err}'") from err
    return MapInputSource(file=file, value_map=values)


def new_toml_source_from_flag_func(
    flag_file_name: str,
) -> Callable[[Any], InputSourceContext]:
    """Return a factory that loads TOML from the file named by a flag."""

    def create(context: Any) -> InputSourceContext:
        if context.is_set(flag_file_name):
            return new_toml_source_from_file(context.string(flag_file_name))
        return default_input_source()

    return create