"""
Configuration management for the feed writer.

Values are read from environment variables (prefix ``FEEDWRITER_``), an
optional ``.env`` file, then the defaults below.

Responsibility: Centralized renderer defaults
"""

import codecs
from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from . import __version__


class WriterSettings(BaseSettings):
    """
    Renderer defaults.

    Example:
        # Compact output, custom generator tag
        settings = WriterSettings(pretty_print=False, generator_name="My Site")
    """

    # Output
    default_encoding: str = Field(
        default="UTF-8",
        description="Document encoding used when a feed does not set one"
    )
    pretty_print: bool = Field(default=True)

    # Generator tag written into documents that do not name their own
    generator_name: str = Field(default="feedwriter")
    generator_version: Optional[str] = Field(default=__version__)
    generator_uri: Optional[str] = Field(default=None)

    model_config = SettingsConfigDict(
        env_prefix="FEEDWRITER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("default_encoding")
    @classmethod
    def check_encoding(cls, v: str) -> str:
        """Reject codec names Python does not know"""
        v = v.strip()
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown encoding: {v}")
        return v


# Global settings instance
settings = WriterSettings()
