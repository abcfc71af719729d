"""Public package surface for the XML path configuration reader.

``XmlConfig`` parses a document once and serves typed values by path; the
remaining exports cover the path syntax, the converter extension point, the
error taxonomy and the logging hooks.
"""

from __future__ import annotations

from .core import XmlConfig
from .domain.conversion import Converter, convert, format_value, register_converter, split_fields, unregister_converter
from .domain.errors import ConfigError, ConversionError, InvalidFormat, NotFound
from .domain.paths import ATTRIBUTE_DELIMITER, PATH_DELIMITER, VALUE_DNE, canonize
from .observability import bind_trace_id, get_logger

__all__ = [
    "ATTRIBUTE_DELIMITER",
    "ConfigError",
    "ConversionError",
    "Converter",
    "InvalidFormat",
    "NotFound",
    "PATH_DELIMITER",
    "VALUE_DNE",
    "XmlConfig",
    "bind_trace_id",
    "canonize",
    "convert",
    "format_value",
    "get_logger",
    "register_converter",
    "split_fields",
    "unregister_converter",
]
