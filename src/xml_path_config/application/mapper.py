"""Flatten an element tree into path-addressable string entries.

Purpose
-------
Walk a parsed document once and record one entry per element and one per
attribute, keyed by canonical path. The walk is deterministic, so the same
document always produces the same keys, including the ``[n]`` suffixes that
tell repeated sibling elements apart.

Contents
--------
* :func:`map_document` – recursive traversal writing into a caller-owned dict.
* :func:`next_free_index` – lowest unused ``[n]`` suffix for a path.

System Role
-----------
Called by :meth:`xml_path_config.core.XmlConfig.load` right after parsing. The
mapper keeps no state of its own; the store owns the resulting mapping.
"""

from __future__ import annotations

from typing import MutableMapping

from ..domain.paths import VALUE_DNE, attribute_path, indexed_path, join_path
from .ports import Element


def map_document(
    node: Element | None,
    nodes: MutableMapping[str, str],
    level: int = 1,
    path: str = "",
) -> None:
    """Record *node*, its attributes and its descendants into *nodes*.

    Parameters
    ----------
    node:
        Element to map. ``None`` (an empty document) records nothing.
    nodes:
        Mapping receiving ``path -> text`` entries.
    level:
        Depth of *node*; the root is level 1 and its name is never part of a
        path.
    path:
        Path of the parent element.

    Examples
    --------
    >>> from lxml import etree
    >>> root = etree.fromstring('<config v="1"><P><X>a</X><X>b</X></P></config>')
    >>> nodes = {}
    >>> map_document(root, nodes)
    >>> sorted(nodes.items())
    [('', '<DNE/>'), (':v', '1'), ('P', '<DNE/>'), ('P.X', 'a'), ('P.X[1]', 'b')]
    """

    if node is None:
        return

    if level > 1:
        path = join_path(path, _local_name(node.tag))

    if path in nodes:
        path = indexed_path(path, next_free_index(nodes, path))
    nodes[path] = _content(node)

    for name, value in node.items():
        nodes[attribute_path(path, _local_name(name))] = value

    for child in node:
        if not isinstance(child.tag, str):
            continue
        map_document(child, nodes, level + 1, path)


def next_free_index(nodes: MutableMapping[str, str], path: str) -> int:
    """Return the lowest ``n >= 1`` for which ``path[n]`` is not yet a key.

    Index 0 is the bare path itself, so probing starts at 1.

    >>> next_free_index({"A": "x", "A[1]": "y"}, "A")
    2
    """

    index = 1
    while indexed_path(path, index) in nodes:
        index += 1
    return index


def _content(node: Element) -> str:
    """Return the element text, or the sentinel when there is none."""

    text = node.text
    if text is None or not text.strip():
        return VALUE_DNE
    return text


def _local_name(tag: object) -> str:
    """Strip a ``{namespace}`` prefix from an element or attribute name."""

    name = str(tag)
    if name.startswith("{"):
        return name.split("}", 1)[1]
    return name


__all__ = ["map_document", "next_free_index"]
