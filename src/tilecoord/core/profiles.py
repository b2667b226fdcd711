"""Built-in tiling profiles."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from tilecoord.core.profile import AxisConvention, Profile

WMTS = Profile(name="wmts", axis_convention=AxisConvention.CANONICAL)
GOOGLE = Profile(name="google", axis_convention=AxisConvention.CANONICAL)
TMS = Profile(name="tms", axis_convention=AxisConvention.TMS)

BUILTIN_PROFILES: Mapping[str, Profile] = MappingProxyType(
    {profile.name: profile for profile in (WMTS, GOOGLE, TMS)}
)


def get_profile(name: str) -> Profile:
    """Look up a built-in profile by name (case-insensitive)."""
    try:
        return BUILTIN_PROFILES[name.strip().lower()]
    except KeyError:
        raise KeyError(f"Unknown profile: {name!r} (available: {', '.join(BUILTIN_PROFILES)})") from None
