"""Shared test configuration and fixtures."""

from datetime import datetime, timezone

import pytest

from plistxml import (
    Array,
    Boolean,
    CodecConfig,
    Data,
    Date,
    Dict,
    Key,
    Real,
    String,
    UnsignedInt,
)

HEADER = (
    b'<?xml version="1.0" encoding="UTF-8"?>\n'
    b'<!DOCTYPE plist PUBLIC "-//Apple Computer//DTD PLIST 1.0//EN" '
    b'"http://www.apple.com/DTDs/PropertyList-1.0.dtd">\n'
    b'<plist version="1.0">\n'
)
FOOTER = b"</plist>\n"


@pytest.fixture
def document():
    """Surround a body with the plist document skeleton."""
    def wrap(body: bytes) -> bytes:
        return HEADER + body + FOOTER
    return wrap


@pytest.fixture
def strict():
    """Codec configuration that raises instead of recovering."""
    return CodecConfig(strict=True)


@pytest.fixture
def device_tree():
    """A dictionary holding one leaf of every kind plus nested containers."""
    return Dict([
        Key("Enabled"), Boolean(True),
        Key("Locked"), Boolean(False),
        Key("Serial"), UnsignedInt(18446744073709551615),
        Key("Ratio"), Real(0.25),
        Key("Name"), String("Alice's <iPhone> & \"co\""),
        Key("Blob"), Data(bytes(range(90))),
        Key("Activated"), Date.from_datetime(datetime(2024, 1, 15, 10, 30, 45, tzinfo=timezone.utc)),
        Key("Apps"), Array([String("Mail"), String("")]),
        Key("Empty"), Dict(),
    ])
