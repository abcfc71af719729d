"""Unit tests for the path syntax helpers."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from xml_path_config.domain.paths import (
    ATTRIBUTE_DELIMITER,
    PATH_DELIMITER,
    VALUE_DNE,
    attribute_path,
    canonize,
    indexed_path,
    is_attribute,
    join_path,
)

PATH_TEXT = st.text(alphabet=st.sampled_from("AB.:[]0 1\t\n"), max_size=20)


def test_delimiters_and_sentinel() -> None:
    assert PATH_DELIMITER == "."
    assert ATTRIBUTE_DELIMITER == ":"
    assert VALUE_DNE == "<DNE/>"


def test_canonize_strips_whitespace() -> None:
    assert canonize(" A .\tB\n:name ") == "A.B:name"


def test_canonize_elides_zero_index() -> None:
    assert canonize("A.B[0]") == "A.B"
    assert canonize("A[0].B:attr") == "A.B:attr"
    assert canonize("A.B[1]") == "A.B[1]"
    assert canonize("A.B[10]") == "A.B[10]"


def test_canonize_removes_every_zero_index() -> None:
    assert canonize("A[0].B[0]") == "A.B"
    assert canonize("A[[0]0]") == "A"


@given(PATH_TEXT)
def test_canonize_is_idempotent(path: str) -> None:
    once = canonize(path)
    assert canonize(once) == once
    assert "[0]" not in once
    assert not any(char.isspace() for char in once)


def test_key_builders() -> None:
    assert join_path("", "A") == "A"
    assert join_path("A", "B") == "A.B"
    assert attribute_path("A.B", "x") == "A.B:x"
    assert attribute_path("", "x") == ":x"
    assert indexed_path("P.X", 1) == "P.X[1]"


def test_is_attribute() -> None:
    assert is_attribute("A:x")
    assert is_attribute(":x")
    assert not is_attribute("A.B[1]")
