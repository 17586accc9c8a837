"""Tests for codec configuration."""

import pytest
from pydantic import ValidationError

from plistxml import CodecConfig
from plistxml.config import DEFAULT_CONFIG, resolve_config


def test_defaults():
    """Test that decoding is lenient and data wraps at 60 columns by default."""
    config = CodecConfig()

    assert config.strict is False
    assert config.data_columns == 60


def test_data_columns_must_be_positive():
    """Test that a zero line width is rejected."""
    with pytest.raises(ValidationError):
        CodecConfig(data_columns=0)


def test_config_is_frozen():
    """Test that configurations cannot be changed after creation."""
    config = CodecConfig()

    with pytest.raises(ValidationError):
        config.strict = True


def test_resolve_config():
    """Test falling back to the default configuration."""
    strict = CodecConfig(strict=True)

    assert resolve_config(None) is DEFAULT_CONFIG
    assert resolve_config(strict) is strict


def test_resolve_config_rejects_other_types():
    """Test that dicts are not accepted as configurations."""
    with pytest.raises(TypeError, match="Expected CodecConfig"):
        resolve_config({"strict": True})
