"""Convert XML bytes to property list trees."""

import logging
import xml.etree.ElementTree as ET
from typing import Any, BinaryIO

import defusedxml.ElementTree as DefusedET
from defusedxml import DefusedXmlException

from plistxml.config import CodecConfig, resolve_config
from plistxml.convert import to_python
from plistxml.exceptions import PlistDecodeError, PlistParseError
from plistxml.serialization.leaf_codec import TAG_ARRAY, TAG_DICT, TAG_TO_TYPE, decode_leaf
from plistxml.types import Array, Dict, PlistNode

_logger = logging.getLogger("plistxml.decoder")

PLIST_TAG = "plist"


def from_xml(
    data: bytes | str,
    length: int | None = None,
    config: CodecConfig | None = None,
) -> PlistNode | None:
    """Parse an XML property list into a tree.

    Parsing goes through defusedxml, so entity expansion and external
    entities are refused rather than resolved.

    Args:
        data: The document. ``str`` input is encoded as UTF-8 first.
        length: Number of bytes of ``data`` to parse, all when omitted
        config: Codec options, defaults when omitted

    Returns:
        Root node of the tree, or ``None`` if the document could not be
        parsed or holds no recognized element

    Raises:
        PlistParseError: If the XML is malformed (strict mode only)
        PlistDecodeError: If an element cannot be decoded (strict mode only)

    Example:
        >>> tree = from_xml(b'<plist version="1.0"><array><true/></array></plist>')
        >>> tree.children
        [Boolean(type='boolean', value=True)]
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"Expected bytes or str, got {type(data)}")
    config = resolve_config(config)
    if length is not None and length < 0:
        raise ValueError(f"length must not be negative, got {length}")

    data = bytes(data if length is None else data[:length])

    try:
        document = DefusedET.fromstring(data)
    except (ET.ParseError, DefusedXmlException) as e:
        if config.strict:
            raise PlistParseError(f"Failed to parse property list: {e}", raw_input=data) from e
        _logger.warning("Failed to parse property list: %s", e)
        return None

    if config.strict and document.tag != PLIST_TAG:
        raise PlistDecodeError(
            f"Expected <{PLIST_TAG}> document element, got <{document.tag}>",
            tag=document.tag,
        )

    root = None
    for node in _document_to_nodes(document, config.strict):
        if root is None:
            root = node
        elif config.strict:
            raise PlistDecodeError(f"More than one top-level value in <{document.tag}>", tag=document.tag)
        elif root.is_container:
            root.append(node)
        else:
            _logger.debug("Discarding top-level %s after a leaf root", node.type)
    return root


def loads(data: bytes | str, config: CodecConfig | None = None) -> Any:
    """Parse an XML property list into plain Python values."""
    tree = from_xml(data, config=config)
    if tree is None:
        return None
    return to_python(tree)


def load(fp: BinaryIO, config: CodecConfig | None = None) -> Any:
    """Parse an XML property list from a binary file."""
    return loads(fp.read(), config)


def _document_to_nodes(document: ET.Element, strict: bool) -> list[PlistNode]:
    """Convert the children of the document element, depth-first.

    Walks with an explicit stack of ``(children, attach)`` entries so that
    nesting depth is bounded only by memory. Containers are attached to
    their parent before their own children are read, which keeps document
    order at every level.
    """
    top_level: list[PlistNode] = []
    stack = [(iter(document), top_level.append)]
    while stack:
        children, attach = stack[-1]
        element = next(children, None)
        if element is None:
            stack.pop()
            continue

        tag = element.tag
        if tag == TAG_ARRAY or tag == TAG_DICT:
            container = Array() if tag == TAG_ARRAY else Dict()
            attach(container)
            stack.append((iter(element), container.append))
            continue

        if tag not in TAG_TO_TYPE:
            if strict:
                raise PlistDecodeError(f"Unknown element <{tag}>", tag=tag)
            _logger.debug("Skipping unknown element <%s>", tag)
            continue

        node = decode_leaf(tag, "".join(element.itertext()), strict)
        if node is not None:
            attach(node)
    return top_level
