"""Structured logging for document reads, parses and store loads.

Purpose
    Give every diagnostic emitted while a configuration document travels from
    disk to the flattened store the same shape, so host applications can
    route and filter it without knowing which layer produced it.

Contents
    - ``TRACE_ID``: context variable holding the trace identifier of the
      current load.
    - ``get_logger``: the ``xml_path_config`` logger, silent until a host
      attaches handlers.
    - ``bind_trace_id``: binds or clears the trace identifier.
    - ``log_debug`` / ``log_info`` / ``log_error``: level-specific entry points
      funnelled through one emitter.
    - ``make_event``: payload builder for load lifecycle events.

System Integration
    The parser adapter reports file reads, parsed roots and syntax errors.
    :meth:`xml_path_config.core.XmlConfig.load` reports the entry count of the
    mapped document and the load outcome. The path mapper and the domain
    layer never log.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any, Final, Mapping

TRACE_ID: ContextVar[str | None] = ContextVar("xml_path_config_trace_id", default=None)
"""Trace identifier stamped onto every entry emitted by this package.

Why
    A host that loads several documents can tell their diagnostics apart
    without passing identifiers through the store's API.
"""

_LOGGER: Final[logging.Logger] = logging.getLogger("xml_path_config")
_LOGGER.addHandler(logging.NullHandler())


def get_logger() -> logging.Logger:
    """Return the package logger.

    Why
        A library must not print on its own; the ``NullHandler`` keeps it quiet
        and hosts attach handlers or formatters here when they want output.
    """

    return _LOGGER


def bind_trace_id(trace_id: str | None) -> None:
    """Bind or clear the trace identifier of the current context.

    Why
        Lets a host correlate one load's read, parse and store events with its
        own request or job identifier.
    What
        Sets :data:`TRACE_ID`; ``None`` removes the binding.
    Side Effects
        Visible to every later log call in the same context.

    Examples
    --------
    >>> bind_trace_id('load-7')
    >>> TRACE_ID.get()
    'load-7'
    >>> bind_trace_id(None)
    >>> TRACE_ID.get() is None
    True
    """

    TRACE_ID.set(trace_id)


def log_debug(message: str, **fields: Any) -> None:
    _emit(logging.DEBUG, message, fields)


def log_info(message: str, **fields: Any) -> None:
    _emit(logging.INFO, message, fields)


def log_error(message: str, **fields: Any) -> None:
    """Emit an error entry; used for unreadable or malformed documents."""

    _emit(logging.ERROR, message, fields)


def make_event(
    source: str | None,
    as_string: bool,
    payload: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Describe one load of the store as structured fields.

    Why
        Success and failure events of :meth:`XmlConfig.load` should carry the
        same keys so log processors can join them.
    What
        Returns ``source`` and ``as_string`` followed by any *payload* fields.
        Literal documents have no filename and report ``source=None``.
    Inputs
        source: Filename of the document, or ``None`` for literal text.
        as_string: Whether the document was passed as text.
        payload: Extra detail such as the entry count or the error message.
    Outputs
        dict[str, Any]: Keyword arguments for the ``log_*`` helpers.

    Examples
    --------
    >>> make_event('config.xml', False, {'entries': 3})
    {'source': 'config.xml', 'as_string': False, 'entries': 3}
    >>> make_event(None, True)
    {'source': None, 'as_string': True}
    """

    event: dict[str, Any] = {"source": source, "as_string": as_string}
    event.update(payload or {})
    return event


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    """Log *message* with *fields* and the bound trace id under ``extra["context"]``."""

    if not _LOGGER.isEnabledFor(level):
        return
    context = {"trace_id": TRACE_ID.get(), **fields}
    _LOGGER.log(level, message, extra={"context": context})
