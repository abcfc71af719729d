"""Text conversion for typed configuration access.

Purpose
-------
Turn stored strings into typed values and back. Every supported type owns one
:class:`Converter` (a parse/format pair) kept in a module-level registry, so
``get``/``set`` on the store dispatch explicitly on the requested type instead
of guessing from the text.

Contents
--------
* :class:`Converter` – immutable parse/format pair.
* :func:`register_converter` and :func:`unregister_converter` – extension point
  for consumer types.
* :func:`converter_for` – registry lookup honouring subclasses.
* :func:`convert` – stored text → typed value.
* :func:`format_value` – typed value → stored text.
* :func:`split_fields` – comma-separated vector text → raw fields.
* Built-ins for ``str``, ``bool``, ``int`` and ``float``.

System Role
-----------
Used by :class:`xml_path_config.core.XmlConfig`. Conversions are pure
functions without shared buffers, so concurrent readers never interfere.
Failures raise :class:`~xml_path_config.domain.errors.ConversionError`; there is
no silent zero value.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from .errors import ConversionError

T = TypeVar("T")

_TRUE_TEXT = "true"
_FALSE_TEXT = "false"
_DECIMAL_INT = re.compile(r"[+-]?[0-9]+")
_WHITESPACE = re.compile(r"\s+")
_VECTOR_SEPARATOR = ","


@dataclass(frozen=True, slots=True)
class Converter(Generic[T]):
    """Parse/format pair for one target type.

    Attributes
    ----------
    parse:
        Callable turning stored text into a value. May raise ``ValueError`` or
        ``TypeError``; :func:`convert` wraps both in ``ConversionError``.
    format:
        Callable turning a value into the text that ``parse`` accepts.
    """

    parse: Callable[[str], T]
    format: Callable[[T], str]


def _parse_str(text: str) -> str:
    return text


def _parse_int(text: str) -> int:
    """Parse a plain decimal integer; digit separators and other bases are refused.

    >>> _parse_int(" -12 ")
    -12
    >>> _parse_int("1_000")
    Traceback (most recent call last):
    ...
    ValueError: invalid literal for int() with base 10: '1_000'
    """

    stripped = text.strip()
    if _DECIMAL_INT.fullmatch(stripped) is None:
        raise ValueError(f"invalid literal for int() with base 10: {stripped!r}")
    return int(stripped)


def _format_int(value: int) -> str:
    return str(int(value))


def _parse_float(text: str) -> float:
    return float(text)


def _parse_bool(text: str) -> bool:
    """Recognise lowercase ``true``/``false``, otherwise use integer truthiness.

    >>> _parse_bool("true"), _parse_bool("false"), _parse_bool("0"), _parse_bool("5")
    (True, False, False, True)
    """

    if text == _FALSE_TEXT:
        return False
    if text == _TRUE_TEXT:
        return True
    return bool(_parse_int(text))


def _format_bool(value: bool) -> str:
    return _TRUE_TEXT if value else _FALSE_TEXT


_CONVERTERS: dict[type, Converter[Any]] = {
    str: Converter(_parse_str, _parse_str),
    bool: Converter(_parse_bool, _format_bool),
    int: Converter(_parse_int, _format_int),
    float: Converter(_parse_float, repr),
}
_BUILTIN_CONVERTERS = dict(_CONVERTERS)


def register_converter(
    kind: type[T],
    parse: Callable[[str], T],
    format: Callable[[T], str] = str,
) -> None:
    """Register (or replace) the converter used for *kind*.

    Consumers use this to read their own value types straight from a path.

    Examples
    --------
    >>> from decimal import Decimal
    >>> register_converter(Decimal, Decimal)
    >>> convert("1.10", Decimal)
    Decimal('1.10')
    """

    _CONVERTERS[kind] = Converter(parse, format)


def unregister_converter(kind: type) -> None:
    """Drop the converter registered for *kind*.

    Built-in types revert to their default converter instead of disappearing;
    unknown types are ignored.

    >>> register_converter(int, lambda text: int(text, 16), hex)
    >>> convert("ff", int)
    255
    >>> unregister_converter(int)
    >>> convert("10", int)
    10
    """

    builtin = _BUILTIN_CONVERTERS.get(kind)
    if builtin is not None:
        _CONVERTERS[kind] = builtin
    else:
        _CONVERTERS.pop(kind, None)


def converter_for(kind: type) -> Converter[Any] | None:
    """Return the converter registered for *kind* or its nearest base class.

    The exact type wins over bases, so ``bool`` never falls back to ``int``.
    """

    exact = _CONVERTERS.get(kind)
    if exact is not None:
        return exact
    for base in getattr(kind, "__mro__", ())[1:]:
        found = _CONVERTERS.get(base)
        if found is not None:
            return found
    return None


def convert(text: str, kind: type[T]) -> T:
    """Convert stored *text* to *kind*.

    A type without its own converter borrows the one of its nearest
    registered base and the parsed value is then passed to ``kind``, so an
    ``IntEnum`` or a ``str`` subclass comes back as an instance of itself.

    Raises
    ------
    ConversionError
        When *kind* has no converter or the text is not a valid literal.

    Examples
    --------
    >>> convert("42", int)
    42
    >>> convert(" 2.5", float)
    2.5
    >>> convert("abc", int)
    Traceback (most recent call last):
    ...
    xml_path_config.domain.errors.ConversionError: Cannot convert 'abc' to int: invalid literal for int() with base 10: 'abc'
    >>> from enum import IntEnum
    >>> class Mode(IntEnum):
    ...     A = 1
    ...     B = 2
    >>> convert("2", Mode)
    <Mode.B: 2>
    """

    converter = converter_for(kind)
    if converter is None:
        raise ConversionError(text, kind, "no converter registered")
    try:
        value = converter.parse(text)
        if kind not in _CONVERTERS and not isinstance(value, kind):
            value = kind(value)
        return value
    except (TypeError, ValueError) as exc:
        raise ConversionError(text, kind, str(exc)) from exc


def format_value(value: Any, kind: type | None = None) -> str:
    """Render *value* as stored text using the converter of *kind*.

    *kind* defaults to ``type(value)``. Types without a converter fall back to
    ``str(value)``.

    >>> format_value(True), format_value(3), format_value(0.1)
    ('true', '3', '0.1')
    """

    converter = converter_for(kind if kind is not None else type(value))
    if converter is None:
        return str(value)
    return converter.format(value)


def split_fields(raw: str) -> list[str]:
    """Split vector text on commas after removing all whitespace.

    Inner empty fields are kept; a trailing one is not, and an empty value
    yields no fields.

    >>> split_fields("1, ,2"), split_fields("1,2,"), split_fields(" ")
    (['1', '', '2'], ['1', '2'], [])
    """

    fields = _WHITESPACE.sub("", raw).split(_VECTOR_SEPARATOR)
    if fields[-1] == "":
        fields.pop()
    return fields


__all__ = [
    "Converter",
    "convert",
    "converter_for",
    "format_value",
    "register_converter",
    "split_fields",
    "unregister_converter",
]
