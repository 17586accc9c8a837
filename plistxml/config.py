"""Codec configuration."""

from pydantic import BaseModel, ConfigDict, Field


class CodecConfig(BaseModel):
    """Options shared by the serializer and the deserializer.

    Attributes:
        strict: Raise on malformed leaves, unknown tags and unparsable
            documents instead of substituting defaults
        data_columns: Number of base64 characters per line in ``<data>``
    """

    model_config = ConfigDict(frozen=True)

    strict: bool = False
    data_columns: int = Field(default=60, ge=1)


DEFAULT_CONFIG = CodecConfig()


def resolve_config(config: CodecConfig | None) -> CodecConfig:
    """Return ``config`` or the shared default."""
    if config is None:
        return DEFAULT_CONFIG
    if not isinstance(config, CodecConfig):
        raise TypeError(f"Expected CodecConfig, got {type(config)}")
    return config
