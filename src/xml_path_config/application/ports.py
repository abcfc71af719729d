"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts the typed store relies on so it can be wired
with any XML backend without depending on a concrete implementation.

Contents
--------
* :class:`Element` – the read-only element surface the path mapper walks.
* :class:`DocumentParser` – turns a file or a literal document into a root
  :class:`Element`.

System Role
-----------
These protocols keep the dependency rule intact: the mapper and the store
depend on abstractions, adapters implement them.
"""

from __future__ import annotations

import os
from typing import Iterator, Protocol, runtime_checkable


@runtime_checkable
class Element(Protocol):
    """Minimal element API (satisfied by ``lxml.etree._Element``).

    ``tag`` is a string for elements and a callable for comments and
    processing instructions; the mapper skips the latter.
    """

    tag: object
    text: str | None

    def items(self) -> list[tuple[str, str]]:
        """Return ``(name, value)`` attribute pairs in document order."""

    def __iter__(self) -> Iterator["Element"]:
        """Iterate over child nodes in document order."""


@runtime_checkable
class DocumentParser(Protocol):
    """Parse XML input into its root element.

    Implementations raise :class:`~xml_path_config.domain.errors.NotFound` for
    unreadable files and :class:`~xml_path_config.domain.errors.InvalidFormat`
    for malformed documents.
    """

    def parse_file(self, path: str | os.PathLike[str]) -> Element:
        """Read and parse the document stored at *path*."""

    def parse_string(self, document: str) -> Element:
        """Parse the literal XML *document*."""
