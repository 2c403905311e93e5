"""Flags whose values can be filled in from an alternate input source."""

from __future__ import annotations

import contextlib
import math
import os
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal
from typing import Any

from .input_source import InputSourceContext

_SET_ERRORS = (KeyError, ValueError, TypeError)


def is_env_var_set(env_vars: Iterable[str]) -> bool:
    """Return True if any of the named environment variables exists."""
    return any(env_var in os.environ for env_var in env_vars)


def float64_to_string(value: float) -> str:
    """Format a float the way a shortest-representation %v formatter does."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    number = Decimal(repr(float(value))).normalize()
    sign, digits, _ = number.as_tuple()
    exponent = number.adjusted()
    if number.is_zero():
        return "-0" if sign else "0"
    if exponent < -4 or exponent >= 21:
        text = "".join(str(digit) for digit in digits)
        mantissa = text[0] + ("." + text[1:] if len(text) > 1 else "")
        exp_sign = "+" if exponent >= 0 else "-"
        return f"{'-' if sign else ''}{mantissa}e{exp_sign}{abs(exponent):02d}"
    return format(number, "f")


def _trim_fraction(whole: int, fraction: int, width: int) -> str:
    if fraction == 0:
        return str(whole)
    return f"{whole}.{fraction:0{width}d}".rstrip("0")


def _format_duration(value: timedelta) -> str:
    nanoseconds = (value // timedelta(microseconds=1)) * 1000
    if nanoseconds == 0:
        return "0s"
    sign = "-" if nanoseconds < 0 else ""
    nanoseconds = abs(nanoseconds)
    if nanoseconds < 1_000:
        return f"{sign}{nanoseconds}ns"
    if nanoseconds < 1_000_000:
        whole, fraction = divmod(nanoseconds, 1_000)
        return f"{sign}{_trim_fraction(whole, fraction, 3)}µs"
    if nanoseconds < 1_000_000_000:
        whole, fraction = divmod(nanoseconds, 1_000_000)
        return f"{sign}{_trim_fraction(whole, fraction, 6)}ms"
    hours, rest = divmod(nanoseconds, 3600 * 1_000_000_000)
    minutes, rest = divmod(rest, 60 * 1_000_000_000)
    seconds, fraction = divmod(rest, 1_000_000_000)
    text = f"{_trim_fraction(seconds, fraction, 9)}s"
    if hours:
        return f"{sign}{hours}h{minutes}m{text}"
    if minutes:
        return f"{sign}{minutes}m{text}"
    return f"{sign}{text}"


def _set_all(flag: FlagInputSourceExtension, text: str) -> None:
    for name in flag._names():
        with contextlib.suppress(*_SET_ERRORS):
            flag.flag_set.set(name, text)


def _replace_all(flag: FlagInputSourceExtension, value: list) -> None:
    for name in flag._names():
        underlying = flag.flag_set.lookup(name)
        if underlying is not None:
            underlying.value = list(value)


def _apply_generic(flag: FlagInputSourceExtension, isc: InputSourceContext) -> None:
    value = isc.generic(flag.name)
    if value is not None:
        _set_all(flag, str(value))


def _apply_string_slice(flag: FlagInputSourceExtension, isc: InputSourceContext) -> None:
    value = isc.string_slice(flag.name)
    if value is not None:
        _replace_all(flag, value)


def _apply_int_slice(flag: FlagInputSourceExtension, isc: InputSourceContext) -> None:
    value = isc.int_slice(flag.name)
    if value is not None:
        _replace_all(flag, value)


def _apply_bool(flag: FlagInputSourceExtension, isc: InputSourceContext) -> None:
    if isc.bool(flag.name):
        _set_all(flag, "true")


def _apply_string(flag: FlagInputSourceExtension, isc: InputSourceContext) -> None:
    value = isc.string(flag.name)
    if value:
        _set_all(flag, value)


def _apply_path(flag: FlagInputSourceExtension, isc: InputSourceContext) -> None:
    value = isc.string(flag.name)
    if not value:
        return
    for name in flag._names():
        source = isc.source()
        if not os.path.isabs(value) and source:
            value = os.path.join(os.path.dirname(os.path.abspath(source)), value)
        with contextlib.suppress(*_SET_ERRORS):
            flag.flag_set.set(name, value)


def _apply_int(flag: FlagInputSourceExtension, isc: InputSourceContext) -> None:
    value = isc.int(flag.name)
    if value > 0:
        _set_all(flag, str(value))


def _apply_duration(flag: FlagInputSourceExtension, isc: InputSourceContext) -> None:
    value = isc.duration(flag.name)
    if value > timedelta(0):
        _set_all(flag, _format_duration(value))


def _apply_float64(flag: FlagInputSourceExtension, isc: InputSourceContext) -> None:
    value = isc.float64(flag.name)
    if value > 0:
        _set_all(flag, float64_to_string(value))


_APPLIERS: dict[str, Callable[[Any, InputSourceContext], None]] = {
    "generic": _apply_generic,
    "string_slice": _apply_string_slice,
    "int_slice": _apply_int_slice,
    "bool": _apply_bool,
    "string": _apply_string,
    "path": _apply_path,
    "int": _apply_int,
    "duration": _apply_duration,
    "float64": _apply_float64,
}


@dataclass
class FlagInputSourceExtension:
    """A flag that can take its value from an input source.

    ``kind`` is one of: generic, string_slice, int_slice, bool, string, path,
    int, duration, float64.  ``flag_set`` must offer ``set(name, text)`` and
    ``lookup(name)`` returning an object with a ``value`` attribute, or None.
    """

    name: str
    kind: str
    aliases: Sequence[str] = ()
    env_vars: Sequence[str] = ()
    flag_set: Any = None

    def __post_init__(self) -> None:
        if self.kind not in _APPLIERS:
            raise ValueError(f"unknown flag kind {self.kind!r}")

    def _names(self) -> list[str]:
        return [self.name, *self.aliases]

    def apply_input_source_value(self, context: Any, isc: InputSourceContext) -> None:
        """Set the flag from the source unless given on the command line or env."""
        if self.flag_set is None:
            return
        if context.is_set(self.name) or is_env_var_set(self.env_vars):
            return
        _APPLIERS[self.kind](self, isc)


def apply_input_source_values(
    context: Any, input_source: InputSourceContext, flags: Iterable[Any]
) -> None:
    """Apply the input source to every flag that supports it."""
    for flag in flags:
        apply = getattr(flag, "apply_input_source_value", None)
        if callable(apply):
            apply(context, input_source)


def init_input_source(
    flags: Iterable[Any], create_input_source: Callable[[], InputSourceContext]
) -> Callable[[Any], None]:
    """Return a before-hook that builds an input source and applies it to flags."""
    flag_list = list(flags)

    def before(context: Any) -> None:
        try:
            input_source = create_input_source()
        except Exception as err:
            raise ValueError(f"Unable to create input source: inner error: \n'{err}'") from err
        apply_input_source_values(context, input_source, flag_list)

    return before


def init_input_source_with_context(
    flags: Iterable[Any], create_input_source: Callable[[Any], InputSourceContext]
) -> Callable[[Any], None]:
    """Like init_input_source, but the factory receives the context."""
    flag_list = list(flags)

    def before(context: Any) -> None:
        try:
            input_source = create_input_source(context)
        except Exception as err:
            raise ValueError(
                f"Unable to create input source with context: inner error: \n'{err}'"
            ) from err
        apply_input_source_values(context, input_source, flag_list)

    return before