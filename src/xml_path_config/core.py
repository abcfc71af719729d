"""Typed configuration store backed by a flattened XML document.

Purpose
-------
Provide the single entry point consumers use: load a document once, then read
values by path with a default for anything that is missing. The module wires
the parser adapter, the path mapper and the converter registry together and
owns the resulting mapping.

Contents
--------
* :class:`XmlConfig` – the store (load, exists, typed get/set, vectors,
  children queries, dump).
* Re-exports of the path constants and error taxonomy for convenience.

System Role
-----------
Missing paths are never errors here: every getter takes a default and returns
it untouched when the path is absent. Parse failures are absorbed by
:meth:`XmlConfig.load` and reported through :attr:`XmlConfig.error_parsing`
so callers relying on defaults keep working against an empty store.
"""

from __future__ import annotations

import os
from typing import Any, Iterator, Sequence, TypeVar

from .adapters.xml_parser import LxmlDocumentParser
from .application.mapper import map_document
from .application.ports import DocumentParser
from .domain.conversion import convert, format_value, split_fields
from .domain.errors import ConfigError, ConversionError, InvalidFormat, NotFound
from .domain.paths import ATTRIBUTE_DELIMITER, PATH_DELIMITER, VALUE_DNE, canonize, is_attribute
from .observability import log_debug, log_error, log_info, make_event

T = TypeVar("T")


class XmlConfig:
    """Flattened, path-addressable view of an XML configuration document.

    Paths join element names with ``.`` (the root element is implicit),
    address repeated siblings with ``[n]`` and attributes with ``:name``.

    Parameters
    ----------
    source:
        Optional filename or literal document loaded immediately.
    as_string:
        Treat *source* as the document text rather than a filename.
    parser:
        :class:`~xml_path_config.application.ports.DocumentParser` to use;
        defaults to :class:`~xml_path_config.adapters.xml_parser.LxmlDocumentParser`.

    Examples
    --------
    >>> cfg = XmlConfig('<config><A attr1="true"><B>hello</B></A></config>', as_string=True)
    >>> cfg.get_bool("A:attr1", False)
    True
    >>> cfg.get_string("A.B", "")
    'hello'
    >>> cfg.get_string("A.C", "missing")
    'missing'
    """

    def __init__(
        self,
        source: str | os.PathLike[str] | None = None,
        *,
        as_string: bool = False,
        parser: DocumentParser | None = None,
    ) -> None:
        self._parser: DocumentParser = parser if parser is not None else LxmlDocumentParser()
        self._nodes: dict[str, str] = {}
        self._error_parsing = False
        self.last_error: str | None = None
        if source is not None:
            self.load(source, as_string=as_string)

    @property
    def error_parsing(self) -> bool:
        """``True`` once any :meth:`load` has failed; never reset afterwards."""

        return self._error_parsing

    def load(self, source: str | os.PathLike[str], as_string: bool = False) -> None:
        """Replace the mapping with the content of *source*.

        The mapping is cleared first. When parsing fails the error flag is set,
        the failure is logged and the store stays empty; no exception escapes.

        Parameters
        ----------
        source:
            Filename to read, or the document text when *as_string* is true.
        as_string:
            Select literal-document mode.
        """

        self._nodes.clear()
        origin = None if as_string else os.fspath(source)
        try:
            if as_string:
                root = self._parser.parse_string(str(source))
            else:
                root = self._parser.parse_file(source)
        except ConfigError as exc:
            self._error_parsing = True
            self.last_error = str(exc)
            log_error("config_parse_failed", **make_event(origin, as_string, {"error": str(exc)}))
            return

        map_document(root, self._nodes, 1)
        log_debug("document_mapped", **make_event(origin, as_string, {"entries": len(self._nodes)}))
        log_info("config_loaded", **make_event(origin, as_string))

    @staticmethod
    def canonize(path: str) -> str:
        """Return the canonical form of *path* (see :func:`xml_path_config.domain.paths.canonize`)."""

        return canonize(path)

    def exists(self, path: str) -> bool:
        """Tell whether *path* (element or attribute) is present."""

        return canonize(path) in self._nodes

    def get(self, path: str, default: Any, kind: type | None = None) -> Any:
        """Return the value at *path* converted to *kind*, or *default*.

        *kind* defaults to ``type(default)``. With neither a kind nor a typed
        default (``default=None``) the raw string is returned.

        Raises
        ------
        ConversionError
            When the stored text cannot be converted.

        Examples
        --------
        >>> cfg = XmlConfig('<config><N>7</N></config>', as_string=True)
        >>> cfg.get("N", 0), cfg.get("N", 0.0), cfg.get("N[0]", None)
        (7, 7.0, '7')
        >>> cfg.get("Missing", 3)
        3
        """

        if not self.exists(path):
            return default
        raw = self._nodes[canonize(path)]
        target = kind if kind is not None else _kind_of(default)
        if target is None or target is str:
            return raw
        return convert(raw, target)

    def get_string(self, path: str, default: str) -> str:
        """Return the stored text at *path* verbatim, or *default*."""

        return self.get(path, default, str)

    def get_bool(self, path: str, default: bool) -> bool:
        """Return ``"true"``/``"false"`` as booleans, other text by integer truthiness."""

        return self.get(path, default, bool)

    def get_int(self, path: str, default: int) -> int:
        return self.get(path, default, int)

    def get_float(self, path: str, default: float) -> float:
        return self.get(path, default, float)

    def set(self, path: str, value: Any, kind: type | None = None) -> None:
        """Store *value* at *path*, overwriting any existing entry.

        No ``[n]`` index is ever added; pass the full indexed path to address
        a repeated element. Strings are stored verbatim, booleans as
        ``"true"``/``"false"``.

        >>> cfg = XmlConfig()
        >>> cfg.set("A.B", True)
        >>> cfg.dump()
        '[A.B] = true\\n'
        """

        self._nodes[canonize(path)] = format_value(value, kind)

    def get_vector(self, path: str, default: Sequence[T], kind: type | None = None) -> Sequence[T] | list[Any]:
        """Return the comma-separated list at *path*, each field converted.

        Whitespace is removed before splitting and inner empty fields are
        kept, so ``"1,,2"`` yields three fields; a trailing comma adds none and
        an empty value yields an empty list. *kind* defaults to the type of the first
        element of *default*, then to ``str``. One malformed field raises
        :class:`ConversionError` for the whole call.

        Examples
        --------
        >>> cfg = XmlConfig('<config><P><Nums>1, 2,3</Nums></P></config>', as_string=True)
        >>> cfg.get_vector("P.Nums", [], int)
        [1, 2, 3]
        >>> cfg.get_vector("P.Other", [0.5])
        [0.5]
        """

        if not self.exists(path):
            return default
        target = kind if kind is not None else (_kind_of(default[0]) if default else None) or str
        return [convert(field, target) for field in split_fields(self._nodes[canonize(path)])]

    def children_of(self, path: str, *, direct: bool = False) -> list[str]:
        """List element keys below *path* in key order.

        By default any key that starts with the characters of *path* matches,
        so deeper descendants and sibling names sharing a prefix (``"AB"`` for
        ``"A"``) are included. ``direct=True`` restricts the result to
        elements exactly one level below *path*. The query path itself and
        attribute keys are never returned.

        Examples
        --------
        >>> cfg = XmlConfig('<config><A><B/><B/><C><D/></C></A><AB/></config>', as_string=True)
        >>> cfg.children_of("A")
        ['A.B', 'A.B[1]', 'A.C', 'A.C.D', 'AB']
        >>> cfg.children_of("A", direct=True)
        ['A.B', 'A.B[1]', 'A.C']
        """

        query = canonize(path)
        if direct:
            return [key for key in self if _is_direct_child(key, query)]
        return [key for key in self if key != query and key.startswith(query) and not is_attribute(key)]

    def dump(self) -> str:
        """Render every entry as ``[key] = value`` lines, for diagnostics only."""

        return "".join(f"[{key}] = {value}\n" for key, value in self.items())

    def items(self) -> list[tuple[str, str]]:
        """Return ``(key, raw value)`` pairs in key order."""

        return sorted(self._nodes.items())

    def as_dict(self) -> dict[str, str]:
        """Return a key-ordered copy of the raw mapping."""

        return dict(self.items())

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.exists(path)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._nodes))

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(entries={len(self._nodes)}, error_parsing={self._error_parsing})"


def _kind_of(value: Any) -> type | None:
    """Return the conversion target implied by a default value."""

    if value is None:
        return None
    return type(value)


def _is_direct_child(key: str, query: str) -> bool:
    """Tell whether *key* is an element exactly one level below *query*."""

    if is_attribute(key):
        return False
    if not query:
        rest = key
    elif key.startswith(query + PATH_DELIMITER):
        rest = key[len(query) + 1 :]
    else:
        return False
    return bool(rest) and PATH_DELIMITER not in rest


__all__ = [
    "ATTRIBUTE_DELIMITER",
    "ConfigError",
    "ConversionError",
    "InvalidFormat",
    "NotFound",
    "PATH_DELIMITER",
    "VALUE_DNE",
    "XmlConfig",
]
