"""Convert property list trees to XML bytes."""

import xml.etree.ElementTree as ET
from typing import Any, BinaryIO
from xml.sax.saxutils import escape

from plistxml.config import CodecConfig, resolve_config
from plistxml.convert import from_python
from plistxml.serialization.leaf_codec import TAG_ARRAY, TAG_DICT, encode_leaf
from plistxml.types import Array, PlistNode

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
DOCTYPE = (
    '<!DOCTYPE plist PUBLIC "-//Apple Computer//DTD PLIST 1.0//EN" '
    '"http://www.apple.com/DTDs/PropertyList-1.0.dtd">'
)
PLIST_TAG = "plist"
PLIST_VERSION = "1.0"

# \r would be normalized away by any XML parser unless written as a reference
_TEXT_ENTITIES = {"'": "&apos;", '"': "&quot;", "\r": "&#13;"}
_ATTRIBUTE_ENTITIES = {'"': "&quot;"}


def to_xml(tree: PlistNode | None, config: CodecConfig | None = None) -> tuple[bytes, int]:
    """Serialize a property list tree to an XML document.

    Args:
        tree: Root node of the tree. ``None`` produces no output.
        config: Codec options, defaults when omitted

    Returns:
        ``(buffer, length)`` with the UTF-8 encoded document

    Example:
        >>> buffer, length = to_xml(String("hi"))
        >>> buffer.splitlines()[3]
        b'<string>hi</string>'
    """
    if tree is None:
        return b"", 0
    if not isinstance(tree, PlistNode):
        raise TypeError(f"Expected PlistNode, got {type(tree)}")
    config = resolve_config(config)

    root = ET.Element(PLIST_TAG, version=PLIST_VERSION)
    root.text = "\n"
    _tree_to_elements(root, tree, config.data_columns)

    buffer = _dump_document(root)
    return buffer, len(buffer)


def dumps(value: Any, config: CodecConfig | None = None) -> bytes:
    """Serialize a Python value, pydantic model or tree to XML bytes."""
    buffer, _ = to_xml(from_python(value), config)
    return buffer


def dump(value: Any, fp: BinaryIO, config: CodecConfig | None = None) -> None:
    """Serialize a Python value, pydantic model or tree to a binary file."""
    fp.write(dumps(value, config))


def _add_content(parent: ET.Element, text: str) -> None:
    """Append text after the last child of parent, or to parent's own text."""
    if not text:
        return
    if len(parent):
        last = parent[-1]
        last.tail = (last.tail or "") + text
    else:
        parent.text = (parent.text or "") + text


def _tree_to_elements(root: ET.Element, tree: PlistNode, columns: int) -> None:
    """Emit tree under root, depth-first, with an explicit stack.

    Stack entries are ``(node, parent, depth)``; a ``None`` node marks the
    closing tag of ``parent``.
    """
    stack = [(tree, root, 0)]
    while stack:
        node, parent, depth = stack.pop()

        if node is None:
            # Closing tag lines up with the opening one
            _add_content(parent, "\t" * depth)
            continue

        _add_content(parent, "\t" * depth)

        if node.is_container:
            element = ET.SubElement(parent, TAG_ARRAY if isinstance(node, Array) else TAG_DICT)
            element.text = "\n"
        else:
            tag, text = encode_leaf(node, depth, columns)
            element = ET.SubElement(parent, tag)
            element.text = text

        _add_content(parent, "\n")

        if node.is_container:
            stack.append((None, element, depth))
            stack.extend((child, element, depth + 1) for child in reversed(node.children))


def _dump_document(root: ET.Element) -> bytes:
    parts = [XML_DECLARATION, "\n", DOCTYPE, "\n"]
    _write_elements(parts, root)
    parts.append("\n")
    return "".join(parts).encode("utf-8")


def _write_elements(parts: list[str], root: ET.Element) -> None:
    """Write root and its descendants; ``(element, True)`` entries close a tag."""
    stack = [(root, False)]
    while stack:
        element, closing = stack.pop()

        if closing:
            parts.append(f"</{element.tag}>")
        else:
            attributes = "".join(
                f' {name}="{escape(value, _ATTRIBUTE_ENTITIES)}"'
                for name, value in element.attrib.items()
            )
            if element.text is None and not len(element):
                parts.append(f"<{element.tag}{attributes}/>")
            else:
                parts.append(f"<{element.tag}{attributes}>")
                if element.text:
                    parts.append(escape(element.text, _TEXT_ENTITIES))
                stack.append((element, True))
                stack.extend((child, False) for child in reversed(element))
                continue

        if element.tail:
            parts.append(escape(element.tail, _TEXT_ENTITIES))
