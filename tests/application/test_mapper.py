"""Tests for the element-tree flattening algorithm."""

from __future__ import annotations

from lxml import etree

from xml_path_config.application.mapper import map_document, next_free_index
from xml_path_config.domain.paths import VALUE_DNE


def _map(document: str) -> dict[str, str]:
    nodes: dict[str, str] = {}
    map_document(etree.fromstring(document), nodes)
    return nodes


def test_root_name_is_not_a_segment() -> None:
    nodes = _map("<config><A><B>hello</B></A></config>")
    assert nodes == {"": VALUE_DNE, "A": VALUE_DNE, "A.B": "hello"}


def test_root_name_is_not_validated() -> None:
    nodes = _map("<settings><A>1</A></settings>")
    assert nodes["A"] == "1"


def test_attributes_use_attribute_delimiter() -> None:
    nodes = _map('<config version="2"><A attr1="true" attr2=""><B name="x"/></A></config>')
    assert nodes[":version"] == "2"
    assert nodes["A:attr1"] == "true"
    assert nodes["A:attr2"] == ""
    assert nodes["A.B:name"] == "x"
    assert nodes["A.B"] == VALUE_DNE


def test_repeated_siblings_are_indexed_from_one() -> None:
    nodes = _map("<config><P><X>a</X><X>b</X><X>c</X></P></config>")
    assert {key for key in nodes if key.startswith("P.X")} == {"P.X", "P.X[1]", "P.X[2]"}
    assert (nodes["P.X"], nodes["P.X[1]"], nodes["P.X[2]"]) == ("a", "b", "c")
    assert "P.X[0]" not in nodes


def test_indexed_elements_carry_their_attributes_and_children() -> None:
    nodes = _map('<config><H name="h0"><T>zero</T></H><H name="h1"><T>one</T></H></config>')
    assert nodes["H:name"] == "h0"
    assert nodes["H[1]:name"] == "h1"
    assert nodes["H.T"] == "zero"
    assert nodes["H[1].T"] == "one"


def test_same_name_under_different_parents_is_not_indexed() -> None:
    nodes = _map("<config><A><X>1</X></A><B><X>2</X></B></config>")
    assert nodes["A.X"] == "1"
    assert nodes["B.X"] == "2"
    assert not any("[" in key for key in nodes)


def test_whitespace_only_text_becomes_sentinel() -> None:
    nodes = _map("<config>\n  <A>\n    <B> padded </B>\n  </A>\n</config>")
    assert nodes[""] == VALUE_DNE
    assert nodes["A"] == VALUE_DNE
    assert nodes["A.B"] == " padded "


def test_text_and_children_together() -> None:
    nodes = _map("<config><A>top<B>inner</B></A></config>")
    assert nodes["A"] == "top"
    assert nodes["A.B"] == "inner"


def test_comments_and_processing_instructions_are_skipped() -> None:
    nodes = _map("<config><!-- note --><?pi data?><A>1</A><!-- tail --></config>")
    assert nodes == {"": VALUE_DNE, "A": "1"}


def test_namespaces_are_reduced_to_local_names() -> None:
    nodes = _map('<config xmlns:x="urn:x"><x:A x:attr="v">1</x:A></config>')
    assert nodes["A"] == "1"
    assert nodes["A:attr"] == "v"


def test_empty_document_records_nothing() -> None:
    nodes: dict[str, str] = {}
    map_document(None, nodes)
    assert nodes == {}


def test_next_free_index_probes_sequentially() -> None:
    assert next_free_index({"A": "x"}, "A") == 1
    assert next_free_index({"A": "x", "A[1]": "y", "A[2]": "z"}, "A") == 3
    assert next_free_index({"A": "x", "A[2]": "z"}, "A") == 1
