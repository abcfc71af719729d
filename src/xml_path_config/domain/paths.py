"""Path syntax of the flattened configuration namespace.

Purpose
-------
Define the delimiters, the sentinel value, and the pure helpers that build and
normalise configuration paths. Both the path mapper (which writes keys) and the
typed store (which looks them up) depend on this module so the two sides can
never disagree on the syntax.

Contents
--------
* :data:`PATH_DELIMITER` – separates element levels (``"A.B"``).
* :data:`ATTRIBUTE_DELIMITER` – separates an attribute name from its element
  path (``"A.B:name"``).
* :data:`VALUE_DNE` – value stored for elements without text.
* :func:`canonize` – whitespace removal and ``[0]`` elision.
* :func:`join_path` / :func:`attribute_path` / :func:`indexed_path` – key
  builders used by the mapper.
* :func:`is_attribute` – attribute key predicate.
"""

from __future__ import annotations

import re
from typing import Final

PATH_DELIMITER: Final[str] = "."
ATTRIBUTE_DELIMITER: Final[str] = ":"
VALUE_DNE: Final[str] = "<DNE/>"
"""Sentinel stored for elements whose text is absent or whitespace only."""

_ZERO_INDEX: Final[str] = "[0]"
_WHITESPACE = re.compile(r"\s+")


def canonize(path: str) -> str:
    """Return *path* in canonical form.

    All whitespace is removed, then every ``[0]`` index is elided so the first
    element of a repeated group is reachable with or without an index. The
    removal repeats until no ``[0]`` is left, which keeps the function
    idempotent for inputs such as ``"A[[0]0]"``.

    Examples
    --------
    >>> canonize(" Level0 . Level1[0] ")
    'Level0.Level1'
    >>> canonize("A[0].B[0]:name")
    'A.B:name'
    >>> canonize("A[10]")
    'A[10]'
    """

    cleaned = _WHITESPACE.sub("", path)
    while _ZERO_INDEX in cleaned:
        cleaned = cleaned.replace(_ZERO_INDEX, "")
    return cleaned


def join_path(parent: str, name: str) -> str:
    """Append element *name* below *parent* without a leading delimiter.

    >>> join_path("", "A")
    'A'
    >>> join_path("A", "B")
    'A.B'
    """

    if not parent:
        return name
    return f"{parent}{PATH_DELIMITER}{name}"


def attribute_path(path: str, name: str) -> str:
    """Return the key addressing attribute *name* of the element at *path*.

    The root element's attributes live under the empty path, e.g. ``":version"``.

    >>> attribute_path("A.B", "name")
    'A.B:name'
    >>> attribute_path("", "version")
    ':version'
    """

    return f"{path}{ATTRIBUTE_DELIMITER}{name}"


def indexed_path(path: str, index: int) -> str:
    """Return *path* with the disambiguation suffix ``[index]``.

    >>> indexed_path("P.X", 2)
    'P.X[2]'
    """

    return f"{path}[{index}]"


def is_attribute(path: str) -> bool:
    """Tell whether *path* addresses an attribute rather than an element."""

    return ATTRIBUTE_DELIMITER in path
