"""plistxml - XML property list codec.

Converts property list trees to and from their canonical XML encoding,
with byte-exact, diffable output and lenient decoding of malformed input.
"""

from plistxml._version import __version__
from plistxml.config import CodecConfig
from plistxml.convert import from_python, plist_to_pydantic, to_python
from plistxml.exceptions import PlistDecodeError, PlistError, PlistParseError, PlistTypeError
from plistxml.serialization import dump, dumps, from_xml, load, loads, to_xml
from plistxml.types import (
    Array,
    Boolean,
    Data,
    Date,
    Dict,
    Key,
    NodeType,
    PlistNode,
    Real,
    String,
    UnsignedInt,
)

__all__ = [
    "__version__",
    "CodecConfig",
    "PlistNode",
    "NodeType",
    "Boolean",
    "UnsignedInt",
    "Real",
    "String",
    "Key",
    "Data",
    "Date",
    "Array",
    "Dict",
    "PlistError",
    "PlistParseError",
    "PlistDecodeError",
    "PlistTypeError",
    "to_xml",
    "from_xml",
    "dumps",
    "dump",
    "loads",
    "load",
    "from_python",
    "to_python",
    "plist_to_pydantic",
]
