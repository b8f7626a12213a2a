"""
Configuration Schemas - Pydantic models for configuration validation.

This module defines the network settings shared by every source and the
on-disk layout of persisted per-source preferences.
"""

from typing import Dict

from pydantic import BaseModel, Field, field_validator


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class NetworkSettings(BaseModel):
    """Transport settings used by a source's HTTP session."""

    timeout: int = Field(
        default=30,
        ge=5,
        le=300,
        description="Network timeout in seconds"
    )
    max_retries: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Maximum number of retry attempts"
    )
    retry_delay: float = Field(
        default=1.0,
        ge=0.0,
        le=30.0,
        description="Base delay between retries in seconds"
    )
    rate_limit: float = Field(
        default=1.0,
        ge=0.0,
        le=10.0,
        description="Minimum seconds between requests"
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User agent string for requests"
    )

    @field_validator('user_agent')
    @classmethod
    def validate_user_agent(cls, v: str) -> str:
        """Validate user agent string."""
        if not v or len(v.strip()) < 10:
            raise ValueError("User agent must be a valid browser string")
        return v.strip()


class PreferencesFile(BaseModel):
    """Persisted preferences, one string map per source scope."""

    version: int = Field(default=1, description="Preferences file format version")
    scopes: Dict[str, Dict[str, str]] = Field(
        default_factory=dict,
        description="Preference values keyed by source scope"
    )


__all__ = ["DEFAULT_USER_AGENT", "NetworkSettings", "PreferencesFile"]
