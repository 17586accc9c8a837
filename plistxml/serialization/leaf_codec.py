"""Text encoding rules for leaf nodes.

Each leaf node maps to one element: a tag name plus optional text content.
Decoding is lenient by default. Malformed numbers, dates and base64 fall
back to a zero value and strings that are not valid UTF-8 are dropped, so
one bad leaf never aborts a whole document. With ``strict=True`` the same
problems raise ``PlistDecodeError``.
"""

import base64
import binascii
import logging
import re
from datetime import datetime
from types import MappingProxyType

from pydantic import ValidationError

from plistxml.exceptions import PlistDecodeError
from plistxml.serialization.formatting import DEFAULT_COLUMNS, format_block
from plistxml.types import (
    UINT64_MAX,
    Boolean,
    Data,
    Date,
    Key,
    NodeType,
    PlistNode,
    Real,
    String,
    UnsignedInt,
)

_logger = logging.getLogger("plistxml.leaf_codec")

TAG_TRUE = "true"
TAG_FALSE = "false"
TAG_INTEGER = "integer"
TAG_REAL = "real"
TAG_STRING = "string"
TAG_KEY = "key"
TAG_DATA = "data"
TAG_DATE = "date"
TAG_ARRAY = "array"
TAG_DICT = "dict"

TAG_TO_TYPE = MappingProxyType({
    TAG_TRUE: NodeType.BOOLEAN,
    TAG_FALSE: NodeType.BOOLEAN,
    TAG_INTEGER: NodeType.UINT,
    TAG_REAL: NodeType.REAL,
    TAG_STRING: NodeType.STRING,
    TAG_KEY: NodeType.KEY,
    TAG_DATA: NodeType.DATA,
    TAG_DATE: NodeType.DATE,
    TAG_ARRAY: NodeType.ARRAY,
    TAG_DICT: NodeType.DICT,
})

# Unsigned integer with C-style base detection: 0x hex, leading 0 octal
_INTEGER_RE = re.compile(r"\s*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")

_REAL_RE = re.compile(
    r"\s*[+-]?(?:inf(?:inity)?|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)",
    re.IGNORECASE,
)


def _fail(message: str, tag: str, text: str) -> PlistDecodeError:
    return PlistDecodeError(message, tag=tag, text=text)


def decode_integer(text: str, strict: bool = False) -> int:
    """Parse unsigned integer text.

    Lenient parsing reads the longest valid prefix. Overflow clamps to
    ``UINT64_MAX``, a minus sign wraps modulo 2**64, and text without any
    digits gives 0.
    """
    match = _INTEGER_RE.match(text)
    if strict and (match is None or match.end() != len(text.rstrip()) or match.group(1) == "-"):
        raise _fail(f"Invalid unsigned integer: {text!r}", TAG_INTEGER, text)
    if match is None:
        _logger.debug("Invalid integer %r, using 0", text)
        return 0

    sign, digits = match.groups()
    if digits[:2] in ("0x", "0X"):
        value = int(digits[2:], 16)
    elif digits.startswith("0"):
        value = int(digits, 8)
    else:
        value = int(digits)

    if value > UINT64_MAX:
        if strict:
            raise _fail(f"Integer out of range: {text!r}", TAG_INTEGER, text)
        _logger.debug("Integer %r overflows, clamping", text)
        value = UINT64_MAX
    if sign == "-":
        value = -value % (UINT64_MAX + 1)
    return value


def encode_real(value: float) -> str:
    """Fixed-point text with six fractional digits."""
    return f"{value:f}"


def decode_real(text: str, strict: bool = False) -> float:
    """Parse real text, reading the longest valid prefix; 0.0 if none."""
    stripped = text.strip()
    if strict:
        if _REAL_RE.fullmatch(stripped) is None:
            raise _fail(f"Invalid real: {text!r}", TAG_REAL, text)
        return float(stripped)

    match = _REAL_RE.match(text)
    if match is None:
        _logger.debug("Invalid real %r, using 0.0", text)
        return 0.0
    return float(match.group(0))


def decode_string(text: str, tag: str = TAG_STRING, strict: bool = False) -> str | None:
    """Return ``text`` if it is valid UTF-8, otherwise ``None``.

    Only text built outside the XML parser, such as a lone surrogate, can
    fail here. The parser rejects invalid UTF-8 bytes itself, so a
    ``<string>`` holding them makes ``from_xml`` fail for the whole document
    (``None``, or ``PlistParseError`` in strict mode) rather than dropping
    that one element.
    """
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        if strict:
            raise _fail(f"<{tag}> content is not valid UTF-8", tag, text) from e
        _logger.debug("Dropping <%s> with invalid UTF-8 content", tag)
        return None
    return text


def encode_data(value: bytes, depth: int, columns: int = DEFAULT_COLUMNS) -> str:
    """Base64 text wrapped into lines indented at ``depth``."""
    if not value:
        return ""
    return format_block(base64.b64encode(value).decode("ascii"), depth, columns)


def decode_data(text: str, strict: bool = False) -> bytes:
    """Decode base64 text, ignoring whitespace."""
    compact = "".join(text.split())
    try:
        return base64.b64decode(compact, validate=strict)
    except (binascii.Error, ValueError) as e:
        if strict:
            raise _fail(f"Invalid base64 data: {e}", TAG_DATA, text) from e
        _logger.debug("Invalid base64 data, using empty buffer")
        return b""


def encode_date(node: Date) -> str:
    """ISO-8601 UTC text, with microseconds only when they are non-zero."""
    moment = node.to_datetime().replace(tzinfo=None)
    text = moment.isoformat(timespec="seconds")
    if node.microseconds:
        text += f".{node.microseconds:06d}"
    return text + "Z"


def decode_date(text: str, strict: bool = False) -> Date:
    """Parse ISO-8601 text. Times without an offset are UTC."""
    try:
        return Date.from_datetime(datetime.fromisoformat(text.strip()))
    except (ValueError, ValidationError) as e:
        if strict:
            raise _fail(f"Invalid date: {text!r}", TAG_DATE, text) from e
        _logger.debug("Invalid date %r, leaving it unset", text)
        return Date()


def encode_leaf(node: PlistNode, depth: int, columns: int = DEFAULT_COLUMNS) -> tuple[str, str | None]:
    """Map a leaf node to its tag and text.

    Args:
        node: The leaf to encode
        depth: Indentation depth of the element, used to wrap data
        columns: Base64 characters per line

    Returns:
        ``(tag, text)``; text is ``None`` for the empty boolean elements
    """
    if isinstance(node, Boolean):
        return (TAG_TRUE if node.value else TAG_FALSE), None
    elif isinstance(node, UnsignedInt):
        return TAG_INTEGER, str(node.value)
    elif isinstance(node, Real):
        return TAG_REAL, encode_real(node.value)
    elif isinstance(node, String):
        return TAG_STRING, node.value
    elif isinstance(node, Key):
        return TAG_KEY, node.value
    elif isinstance(node, Data):
        return TAG_DATA, encode_data(node.value, depth, columns)
    elif isinstance(node, Date):
        return TAG_DATE, encode_date(node)

    raise TypeError(f"Expected a leaf node, got {type(node)}")


def decode_leaf(tag: str, text: str, strict: bool = False) -> PlistNode | None:
    """Build the leaf node for an element.

    Returns ``None`` when the element is not a leaf tag or when its
    content had to be dropped.
    """
    if tag == TAG_TRUE:
        return Boolean(True)
    elif tag == TAG_FALSE:
        return Boolean(False)
    elif tag == TAG_INTEGER:
        return UnsignedInt(decode_integer(text, strict))
    elif tag == TAG_REAL:
        return Real(decode_real(text, strict))
    elif tag == TAG_DATE:
        return decode_date(text, strict)
    elif tag == TAG_DATA:
        return Data(decode_data(text, strict))
    elif tag in (TAG_STRING, TAG_KEY):
        value = decode_string(text, tag, strict)
        if value is None:
            return None
        return String(value) if tag == TAG_STRING else Key(value)

    return None
