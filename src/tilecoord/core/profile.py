"""Tiling profiles: named, immutable bundles of tiling configuration."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)


class AxisConvention(str, Enum):
    CANONICAL = "canonical"
    TMS = "tms"


_CONVENTION_ALIASES = {
    "canonical": AxisConvention.CANONICAL,
    "wmts": AxisConvention.CANONICAL,
    "google": AxisConvention.CANONICAL,
    "xyz": AxisConvention.CANONICAL,
    "tms": AxisConvention.TMS,
    "flipped": AxisConvention.TMS,
}


def parse_convention(value: object) -> AxisConvention:
    """Resolve a convention name (``wmts``, ``google``, ``tms``...) to an enum."""
    if isinstance(value, AxisConvention):
        return value
    if isinstance(value, str):
        convention = _CONVENTION_ALIASES.get(value.strip().lower())
        if convention is not None:
            return convention
    raise ValueError(f"Unknown axis convention: {value!r}")


class Profile(BaseModel):
    """Tiling configuration shared by every tile built or rendered with it.

    A profile never changes the canonical tile stored in a
    ``TileCoordinate``; it only affects how input is interpreted (axis flip,
    zoom bounds) and how URLs are rendered.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(default="default")
    axis_convention: AxisConvention = Field(default=AxisConvention.CANONICAL)
    min_zoom: Optional[int] = Field(default=None, ge=0)
    max_zoom: Optional[int] = Field(default=None, ge=0)
    url_template: str = Field(default="")
    url_prefixes: Tuple[str, ...] = Field(default=("",))
    placeholder_open: str = Field(default="{{", min_length=1)
    placeholder_close: str = Field(default="}}", min_length=1)

    @field_validator("axis_convention", mode="before")
    @classmethod
    def _resolve_convention(cls, value: object) -> AxisConvention:
        return parse_convention(value)

    @field_validator("url_prefixes", mode="before")
    @classmethod
    def _default_prefixes(cls, value: object) -> object:
        if value is None or (isinstance(value, (list, tuple)) and len(value) == 0):
            return ("",)
        if isinstance(value, str):
            return (value,)
        return value

    @model_validator(mode="after")
    def _check_zoom_bounds(self) -> Profile:
        if self.min_zoom is not None and self.max_zoom is not None and self.min_zoom > self.max_zoom:
            raise ValueError(f"min_zoom ({self.min_zoom}) is greater than max_zoom ({self.max_zoom})")
        return self

    @property
    def is_tms(self) -> bool:
        return self.axis_convention is AxisConvention.TMS

    def clamp_zoom(self, z: int) -> int:
        """Return ``z`` limited to the profile's zoom bounds."""
        clamped = z
        if self.min_zoom is not None and clamped < self.min_zoom:
            clamped = self.min_zoom
        if self.max_zoom is not None and clamped > self.max_zoom:
            clamped = self.max_zoom
        if clamped != z:
            logger.debug("Zoom %d clamped to %d by profile '%s'", z, clamped, self.name)
        return clamped

    def derive(self, **overrides: object) -> Profile:
        """Return a new profile with some options replaced."""
        data = self.model_dump()
        data.update(overrides)
        return Profile(**data)


DEFAULT_PROFILE = Profile()
