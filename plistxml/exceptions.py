"""Exception classes for plistxml."""


class PlistError(Exception):
    """Base exception for all plistxml errors."""


class PlistParseError(PlistError):
    """Raised when a document cannot be parsed as XML.

    Only raised in strict mode; lenient decoding returns ``None`` instead.

    Attributes:
        message: Human-readable error description
        raw_input: The bytes that failed to parse (optional)
    """

    def __init__(self, message: str, raw_input: bytes | None = None):
        super().__init__(message)
        self.raw_input = raw_input


class PlistDecodeError(PlistError):
    """Raised when an element cannot be turned into a node.

    Only raised in strict mode. Lenient decoding substitutes a default
    value, or drops the node, and keeps going.

    Attributes:
        message: Human-readable error description
        tag: Tag name of the offending element
        text: Text content of the offending element (optional)
    """

    def __init__(self, message: str, tag: str | None = None, text: str | None = None):
        super().__init__(message)
        self.tag = tag
        self.text = text


class PlistTypeError(PlistError, TypeError):
    """Raised when a Python value has no property list representation."""
