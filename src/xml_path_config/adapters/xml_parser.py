"""lxml-backed document parser.

Purpose
-------
Convert XML files and literal documents into an element tree the path mapper
can walk. The adapter is a thin wrapper around :func:`lxml.etree.fromstring`
so error translation and observability live in one place.

Contents
--------
* :func:`build_parser` – the hardened :class:`lxml.etree.XMLParser` shared by
  all loads.
* :class:`LxmlDocumentParser` – implementation of
  :class:`xml_path_config.application.ports.DocumentParser`.

System Role
-----------
Invoked by :meth:`xml_path_config.core.XmlConfig.load`. Failures surface as
:class:`NotFound` or :class:`InvalidFormat`, which the store turns into its
sticky error flag.
"""

from __future__ import annotations

import os
from pathlib import Path

from lxml import etree

from ..domain.errors import InvalidFormat, NotFound
from ..observability import log_debug, log_error

_STRING_ENCODING = "utf-8"


def build_parser(encoding: str | None = None) -> etree.XMLParser:
    """Return a parser that drops comments and PIs and never resolves entities.

    Comments and processing instructions carry no configuration data;
    external entities and network access are disabled for untrusted input.
    A non-``None`` *encoding* overrides whatever the XML declaration names.
    """

    return etree.XMLParser(
        encoding=encoding,
        remove_comments=True,
        remove_pis=True,
        resolve_entities=False,
        no_network=True,
    )


class LxmlDocumentParser:
    """Parse configuration documents with lxml."""

    def __init__(self, parser: etree.XMLParser | None = None) -> None:
        self._parser = parser if parser is not None else build_parser()
        # literal documents are always re-encoded as UTF-8, whatever they declare
        self._string_parser = parser if parser is not None else build_parser(encoding=_STRING_ENCODING)

    def parse_file(self, path: str | os.PathLike[str]) -> etree._Element:
        """Read *path* and return its root element.

        Raises
        ------
        NotFound
            When *path* is not a readable regular file.
        InvalidFormat
            When the content is not well-formed XML.

        Examples
        --------
        >>> from tempfile import NamedTemporaryFile
        >>> tmp = NamedTemporaryFile("w", suffix=".xml", delete=False, encoding="utf-8")
        >>> _ = tmp.write("<config><A>1</A></config>")
        >>> tmp.close()
        >>> LxmlDocumentParser().parse_file(tmp.name).tag
        'config'
        >>> Path(tmp.name).unlink()
        """

        file_path = Path(path)
        if not file_path.is_file():
            raise NotFound(f"Configuration file not found: {path}")
        try:
            payload = file_path.read_bytes()
        except OSError as exc:
            raise NotFound(f"Configuration file not readable: {path}: {exc}") from exc
        log_debug("xml_file_read", path=str(path), size=len(payload))
        return self._parse(payload, self._parser, source=str(path))

    def parse_string(self, document: str) -> etree._Element:
        """Parse the literal *document* and return its root element.

        The text is handed to lxml as UTF-8, so an encoding named in the XML
        declaration is ignored; the string is already decoded.

        >>> LxmlDocumentParser().parse_string("<config><A/></config>")[0].tag
        'A'
        """

        return self._parse(document.encode(_STRING_ENCODING), self._string_parser, source="<string>")

    def _parse(self, payload: bytes, parser: etree.XMLParser, *, source: str) -> etree._Element:
        """Parse *payload*, translating lxml failures into :class:`InvalidFormat`."""

        try:
            root = etree.fromstring(payload, parser)
        except (etree.XMLSyntaxError, ValueError) as exc:
            log_error("xml_document_invalid", path=source, error=str(exc))
            raise InvalidFormat(f"Invalid XML in {source}: {exc}") from exc
        if root is None:
            log_error("xml_document_invalid", path=source, error="no root element")
            raise InvalidFormat(f"Invalid XML in {source}: no root element")
        log_debug("xml_document_parsed", path=source, root=_local_name(root.tag))
        return root


def _local_name(tag: object) -> str:
    """Return *tag* without its ``{namespace}`` prefix."""

    return etree.QName(tag).localname if isinstance(tag, str) else str(tag)


__all__ = ["LxmlDocumentParser", "build_parser"]
