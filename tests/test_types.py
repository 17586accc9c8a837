"""Tests for property list node types."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from plistxml.types import (
    UINT64_MAX,
    Array,
    Boolean,
    Data,
    Date,
    Dict,
    Key,
    NodeType,
    Real,
    String,
    UnsignedInt,
)


def test_leaf_positional_value():
    """Test that leaves accept their payload positionally or by keyword."""
    assert String("x").value == "x"
    assert String(value="x") == String("x")
    assert Boolean().value is False
    assert Data(b"\x00").value == b"\x00"


def test_node_type_tags():
    """Test that every node reports its kind."""
    assert Boolean().type == NodeType.BOOLEAN
    assert UnsignedInt().type == NodeType.UINT
    assert Real().type == NodeType.REAL
    assert String().type == NodeType.STRING
    assert Key().type == NodeType.KEY
    assert Data().type == NodeType.DATA
    assert Date().type == NodeType.DATE
    assert Array().type == NodeType.ARRAY
    assert Dict().type == NodeType.DICT


def test_unsigned_int_range():
    """Test that integers are limited to the unsigned 64-bit range."""
    assert UnsignedInt(UINT64_MAX).value == UINT64_MAX
    with pytest.raises(ValidationError):
        UnsignedInt(-1)
    with pytest.raises(ValidationError):
        UnsignedInt(UINT64_MAX + 1)


@pytest.mark.parametrize("text", ["a\x01b", "\x00", "\x1f", "\ufffe"])
def test_text_rejects_non_xml_characters(text):
    """Test that strings and keys refuse characters XML 1.0 cannot carry."""
    with pytest.raises(ValidationError, match="not allowed in XML"):
        String(text)
    with pytest.raises(ValidationError, match="not allowed in XML"):
        Key(text)


def test_text_accepts_xml_characters():
    """Test the whitespace controls and characters beyond the BMP."""
    assert String("\t\n\r").value == "\t\n\r"
    assert Key("caf\u00e9 \U0001f600").value == "caf\u00e9 \U0001f600"


def test_text_assignment_is_validated():
    """Test that changing a value later goes through the same check."""
    node = String("ok")

    with pytest.raises(ValidationError):
        node.value = "bad\x02"
    assert node.value == "ok"


def test_date_microsecond_range():
    """Test that the fractional part stays below one second."""
    with pytest.raises(ValidationError):
        Date(seconds=0, microseconds=1_000_000)


def test_date_datetime_conversion():
    """Test conversion to and from aware datetimes."""
    moment = datetime(2024, 1, 15, 10, 30, 45, 123456, tzinfo=timezone.utc)
    node = Date.from_datetime(moment)

    assert node.seconds == 1705314645
    assert node.microseconds == 123456
    assert node.to_datetime() == moment


def test_date_naive_is_utc():
    """Test that naive datetimes are taken as UTC."""
    assert Date.from_datetime(datetime(1970, 1, 1, 0, 1)) == Date(seconds=60)


def test_date_with_offset():
    """Test that offsets are converted to UTC."""
    moment = datetime(1970, 1, 1, 2, 0, tzinfo=timezone(timedelta(hours=2)))

    assert Date.from_datetime(moment) == Date(seconds=0)


def test_date_before_epoch():
    """Test negative timestamps."""
    node = Date.from_datetime(datetime(1969, 12, 31, 23, 59, 59, 500000, tzinfo=timezone.utc))

    assert node.seconds == -1
    assert node.microseconds == 500000


def test_is_container():
    """Test container detection."""
    assert Array().is_container
    assert Dict().is_container
    assert not String().is_container
    assert not Date().is_container


def test_container_append_and_iterate():
    """Test attaching and iterating children in order."""
    array = Array()
    child = array.append(String("a"))
    array.append(UnsignedInt(1))

    assert child == String("a")
    assert len(array) == 2
    assert list(array) == [String("a"), UnsignedInt(1)]
    assert array[1] == UnsignedInt(1)


def test_container_append_rejects_non_nodes():
    """Test that only nodes can be attached."""
    with pytest.raises(TypeError, match="Expected PlistNode"):
        Array().append("a")


def test_dict_items():
    """Test key/value pairing, including a trailing unpaired key."""
    node = Dict([Key("a"), String("1"), Key("b"), UnsignedInt(2), Key("c")])

    assert list(node.items()) == [
        (Key("a"), String("1")),
        (Key("b"), UnsignedInt(2)),
        (Key("c"), None),
    ]


def test_containers_do_not_share_children():
    """Test that default children lists are independent."""
    first, second = Array(), Array()
    first.append(Boolean(True))

    assert len(second) == 0


def test_validate_nested_tree():
    """Test building a tree from plain data through the discriminated union."""
    node = Dict.model_validate({
        "children": [
            {"type": "key", "value": "items"},
            {"type": "array", "children": [{"type": "integer", "value": 3}]},
        ]
    })

    assert node == Dict([Key("items"), Array([UnsignedInt(3)])])


def test_validate_rejects_unknown_kind():
    """Test that unknown kinds fail validation."""
    with pytest.raises(ValidationError):
        Array.model_validate({"children": [{"type": "foo"}]})
