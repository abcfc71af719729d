from __future__ import annotations

import logging
from pathlib import Path

import pytest

from xml_path_config.adapters.xml_parser import LxmlDocumentParser
from xml_path_config.domain.errors import InvalidFormat, NotFound


def test_parse_string_returns_root() -> None:
    root = LxmlDocumentParser().parse_string('<config a="1"><B/></config>')
    assert root.tag == "config"
    assert root.items() == [("a", "1")]


def test_parse_string_accepts_xml_declaration() -> None:
    root = LxmlDocumentParser().parse_string('<?xml version="1.0" encoding="UTF-8"?><config/>')
    assert root.tag == "config"


def test_parse_file(tmp_path: Path) -> None:
    path = tmp_path / "config.xml"
    path.write_text("<config><A>é</A></config>", encoding="utf-8")
    root = LxmlDocumentParser().parse_file(path)
    assert root[0].text == "é"


def test_parse_file_missing(tmp_path: Path) -> None:
    with pytest.raises(NotFound):
        LxmlDocumentParser().parse_file(tmp_path / "missing.xml")


def test_parse_file_directory(tmp_path: Path) -> None:
    with pytest.raises(NotFound):
        LxmlDocumentParser().parse_file(tmp_path)


@pytest.mark.parametrize("document", ["", "<config>", "<config></other>", "not xml", "<a/><b/>"])
def test_parse_string_invalid(document: str) -> None:
    with pytest.raises(InvalidFormat):
        LxmlDocumentParser().parse_string(document)


def test_invalid_document_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.ERROR, logger="xml_path_config")
    with pytest.raises(InvalidFormat):
        LxmlDocumentParser().parse_string("<config>")
    assert caplog.records[-1].getMessage() == "xml_document_invalid"
    assert getattr(caplog.records[-1], "context")["path"] == "<string>"


def test_comments_are_removed() -> None:
    root = LxmlDocumentParser().parse_string("<config><!-- c --><A/></config>")
    assert [child.tag for child in root] == ["A"]


def test_entities_are_not_expanded() -> None:
    document = (
        '<?xml version="1.0"?><!DOCTYPE config [<!ENTITY name "expanded">]>'
        "<config><A>&name;</A></config>"
    )
    root = LxmlDocumentParser().parse_string(document)
    assert root[0].text != "expanded"


@pytest.mark.parametrize("encoding", ["ISO-8859-1", "UTF-16"])
def test_parse_string_ignores_declared_encoding(encoding: str) -> None:
    document = f'<?xml version="1.0" encoding="{encoding}"?><config><A>é</A></config>'
    root = LxmlDocumentParser().parse_string(document)
    assert root[0].text == "é"


def test_parse_file_honours_declared_encoding(tmp_path: Path) -> None:
    path = tmp_path / "latin.xml"
    path.write_bytes('<?xml version="1.0" encoding="ISO-8859-1"?><config><A>é</A></config>'.encode("latin-1"))
    root = LxmlDocumentParser().parse_file(path)
    assert root[0].text == "é"
