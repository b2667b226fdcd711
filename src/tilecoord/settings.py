"""Settings for tiling profiles and the tile fetch client."""

from __future__ import annotations

import logging
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tilecoord.core.profile import DEFAULT_PROFILE, AxisConvention, Profile, parse_convention
from tilecoord.core.profiles import get_profile

logger = logging.getLogger(__name__)


class ProfileSettings(BaseSettings):
    """Profile options read from the environment.

    Options left unset fall back to the ``base`` built-in profile when one is
    named, and to the library defaults otherwise.
    """

    base: Optional[str] = Field(
        default=None,
        description="Built-in profile to start from (wmts, google, tms)",
    )
    name: Optional[str] = Field(default=None)
    axis_convention: Optional[AxisConvention] = Field(default=None)
    min_zoom: Optional[int] = Field(default=None, ge=0)
    max_zoom: Optional[int] = Field(default=None, ge=0)
    url_template: Optional[str] = Field(default=None)
    url_prefixes: Optional[List[str]] = Field(
        default=None,
        description="Host prefixes used to spread requests, e.g. [\"a.\", \"b.\", \"c.\"]",
    )
    placeholder_open: Optional[str] = Field(default=None)
    placeholder_close: Optional[str] = Field(default=None)

    model_config = SettingsConfigDict(
        env_prefix="TILECOORD_PROFILE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("axis_convention", mode="before")
    @classmethod
    def _resolve_convention(cls, value: object) -> Optional[AxisConvention]:
        return None if value is None else parse_convention(value)

    def to_profile(self) -> Profile:
        profile = get_profile(self.base) if self.base else DEFAULT_PROFILE
        overrides = self.model_dump(exclude={"base"}, exclude_none=True)
        if overrides:
            profile = profile.derive(**overrides)
        logger.debug("Loaded profile '%s' (%s)", profile.name, profile.axis_convention.value)
        return profile


class FetcherSettings(BaseSettings):
    """Settings for the tile fetch client."""

    max_retries: int = Field(
        default=3,
        ge=0,
        description="Attempts made after the first failed one",
    )
    timeout_s: float = Field(default=30.0, gt=0)
    retry_delay_s: float = Field(default=0.5, ge=0)
    max_workers: int = Field(default=4, ge=1)

    model_config = SettingsConfigDict(
        env_prefix="TILECOORD_FETCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
