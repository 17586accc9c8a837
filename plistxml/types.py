"""Property list node types.

A tree is built from nine node classes. Seven are leaves carrying a single
payload; ``Array`` and ``Dict`` are containers carrying ordered children.
``Dict`` children alternate ``Key`` and value nodes by convention only, the
pairing is never validated.

Example:
    >>> root = Dict()
    >>> root.append(Key("name"))
    Key(type='key', value='name')
    >>> root.append(String("Alice"))
    String(type='string', value='Alice')
    >>> [(k.value, v.value) for k, v in root.items()]
    [('name', 'Alice')]
"""

import re
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Annotated, Any, Iterator, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

UINT64_MAX = 2**64 - 1

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# datetime.min and datetime.max as seconds from the epoch
MIN_SECONDS = -62135596800
MAX_SECONDS = 253402300799

_MISSING = object()

# Characters outside the XML 1.0 Char production
_FORBIDDEN_CHARS = re.compile(r"[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")


class NodeType(str, Enum):
    """Kind of a property list node."""
    BOOLEAN = "boolean"
    UINT = "integer"
    REAL = "real"
    STRING = "string"
    KEY = "key"
    DATA = "data"
    DATE = "date"
    ARRAY = "array"
    DICT = "dict"


class PlistNode(BaseModel):
    """Base class for every node in a property list tree."""

    model_config = ConfigDict(validate_assignment=True)

    @property
    def is_container(self) -> bool:
        return False


class _Leaf(PlistNode):
    """Leaf node whose payload may be passed positionally."""

    def __init__(self, value: Any = _MISSING, /, **data: Any):
        if value is not _MISSING:
            data["value"] = value
        super().__init__(**data)


class Boolean(_Leaf):
    type: Literal["boolean"] = "boolean"
    value: bool = False


class UnsignedInt(_Leaf):
    """Unsigned 64-bit integer."""
    type: Literal["integer"] = "integer"
    value: int = Field(default=0, ge=0, le=UINT64_MAX)


class Real(_Leaf):
    """64-bit float, ``inf`` and ``nan`` included."""
    type: Literal["real"] = "real"
    value: float = 0.0


def _check_xml_text(value: str) -> str:
    match = _FORBIDDEN_CHARS.search(value)
    if match:
        raise ValueError(f"Character {match.group()!r} at index {match.start()} is not allowed in XML")
    return value


class String(_Leaf):
    """Text made of characters XML 1.0 can carry."""
    type: Literal["string"] = "string"
    value: str = ""

    @field_validator("value")
    @classmethod
    def check_characters(cls, value: str) -> str:
        return _check_xml_text(value)


class Key(_Leaf):
    """Dictionary key. Serialized like a string under a ``<key>`` tag."""
    type: Literal["key"] = "key"
    value: str = ""

    @field_validator("value")
    @classmethod
    def check_characters(cls, value: str) -> str:
        return _check_xml_text(value)


class Data(_Leaf):
    """Raw bytes, serialized as base64."""
    type: Literal["data"] = "data"
    value: bytes = b""


class Date(PlistNode):
    """UTC timestamp stored as whole seconds from the epoch plus microseconds.

    Attributes:
        seconds: Seconds since 1970-01-01T00:00:00Z
        microseconds: Fractional part, 0 to 999999
    """
    type: Literal["date"] = "date"
    seconds: int = Field(default=0, ge=MIN_SECONDS, le=MAX_SECONDS)
    microseconds: int = Field(default=0, ge=0, le=999_999)

    @classmethod
    def from_datetime(cls, value: datetime) -> "Date":
        """Build a Date from a datetime. Naive datetimes are taken as UTC."""
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        delta = value - EPOCH
        return cls(
            seconds=delta.days * 86400 + delta.seconds,
            microseconds=delta.microseconds,
        )

    def to_datetime(self) -> datetime:
        """Return the timestamp as an aware UTC datetime."""
        return EPOCH + timedelta(seconds=self.seconds, microseconds=self.microseconds)


class _Container(PlistNode):
    """Node holding an ordered sequence of children."""

    def __init__(self, children: Any = _MISSING, /, **data: Any):
        if children is not _MISSING:
            data["children"] = children
        super().__init__(**data)

    @property
    def is_container(self) -> bool:
        return True

    def append(self, child: PlistNode) -> PlistNode:
        """Attach ``child`` as the last child and return it."""
        if not isinstance(child, PlistNode):
            raise TypeError(f"Expected PlistNode, got {type(child)}")
        self.children.append(child)
        return child

    def __iter__(self) -> Iterator[PlistNode]:  # type: ignore[override]
        return iter(self.children)

    def __len__(self) -> int:
        return len(self.children)

    def __getitem__(self, index: int) -> PlistNode:
        return self.children[index]


class Array(_Container):
    type: Literal["array"] = "array"
    children: list["Node"] = Field(default_factory=list)


class Dict(_Container):
    """Dictionary stored as alternating key and value children."""
    type: Literal["dict"] = "dict"
    children: list["Node"] = Field(default_factory=list)

    def items(self) -> Iterator[tuple[PlistNode, PlistNode | None]]:
        """Yield ``(key, value)`` pairs; a trailing key pairs with ``None``."""
        children = iter(self.children)
        for key in children:
            yield key, next(children, None)


Node = Annotated[
    Union[Boolean, UnsignedInt, Real, String, Key, Data, Date, Array, Dict],
    Field(discriminator="type"),
]

Array.model_rebuild()
Dict.model_rebuild()
