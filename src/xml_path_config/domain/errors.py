"""Domain-level exception hierarchy.

Purpose
-------
Expose the error taxonomy shared by the parser adapter, the path mapper, the
typed store, and consuming applications. The hierarchy lives in the domain
layer so outer layers can depend on it without creating import cycles.

Contents
--------
* :class:`ConfigError` – umbrella base class for all library errors.
* :class:`InvalidFormat` – the XML document could not be parsed.
* :class:`NotFound` – the XML file is missing or unreadable.
* :class:`ConversionError` – stored text cannot be converted to the requested
  type.

System Role
-----------
The parser adapter raises :class:`InvalidFormat` and :class:`NotFound`; the
store absorbs both inside :meth:`xml_path_config.core.XmlConfig.load` and
records them in its error flag. :class:`ConversionError` escapes typed getters
because a present-but-unconvertible value is a caller bug, not a missing value.
"""

from __future__ import annotations


class ConfigError(Exception):
    """Base type for all exceptions emitted by ``xml_path_config``.

    Callers that do not need fine-grained handling catch this single type.
    """


class InvalidFormat(ConfigError):
    """Raised when a document is not well-formed XML.

    Typical Sources
    ---------------
    :class:`xml_path_config.adapters.xml_parser.LxmlDocumentParser` when lxml
    reports a syntax error or the document has no root element.
    """


class NotFound(ConfigError):
    """Raised when the XML file to load does not exist or cannot be read."""


class ConversionError(ConfigError, ValueError):
    """Raised when stored text cannot be converted to the requested type.

    Also a :class:`ValueError` so code written against the built-in parsers
    (``int("x")``) keeps working unchanged.

    Attributes
    ----------
    text:
        The raw stored string that failed to convert.
    kind:
        The requested target type.

    Examples
    --------
    >>> err = ConversionError("abc", int)
    >>> str(err)
    "Cannot convert 'abc' to int"
    >>> isinstance(err, ValueError)
    True
    """

    def __init__(self, text: str, kind: type, reason: str | None = None) -> None:
        self.text = text
        self.kind = kind
        message = f"Cannot convert {text!r} to {getattr(kind, '__name__', kind)}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
