"""Tile URL parsing and template rendering."""

from __future__ import annotations

import random
import re
from functools import lru_cache
from typing import Dict, Mapping, Optional, Sequence, Tuple

from tilecoord.core.errors import InvalidUrl

# /Z/X/Y anywhere in the url
_SLASH_PATTERN = re.compile(r"/(\d+)/(\d+)/(\d+)")
# three key=value pairs with keys among x, y, z in any order
_PARAM_PATTERN = re.compile(r"([xyz])=(\d+)[&;]([xyz])=(\d+)[&;]([xyz])=(\d+)", re.IGNORECASE)
# Z_X_Y with the same non-alphanumeric separator twice
_GENERIC_PATTERN = re.compile(r"(\d+)([^0-9A-Za-z])(\d+)\2(\d+)")

_PLACEHOLDER_KEYS = ("x", "y", "z", "p")


def parse_tile_url(url: str) -> Tuple[int, int, int]:
    """Extract ``(z, x, y)`` from a tile URL.

    Layouts are tried in order: ``/z/x/y``, ``x=..&y=..&z=..`` and finally
    ``z_x_y`` with any repeated separator. The first layout found wins.

    Raises:
        InvalidUrl: If no layout matches, or the parameter layout does not
            name each of x, y and z exactly once.
    """
    if not isinstance(url, str) or not url:
        raise InvalidUrl(f"Invalid url: {url!r}")

    match = _SLASH_PATTERN.search(url)
    if match:
        z, x, y = match.groups()
        return int(z), int(x), int(y)

    match = _PARAM_PATTERN.search(url)
    if match:
        groups = match.groups()
        params: Dict[str, str] = {}
        for key, value in zip(groups[0::2], groups[1::2]):
            params[key.lower()] = value
        missing = [key for key in ("x", "y", "z") if key not in params]
        if missing:
            raise InvalidUrl(f"Invalid url (missing {', '.join(missing)}): {url!r}")
        return int(params["z"]), int(params["x"]), int(params["y"])

    match = _GENERIC_PATTERN.search(url)
    if match:
        z, _, x, y = match.groups()
        return int(z), int(x), int(y)

    raise InvalidUrl(f"Invalid url: {url!r}")


@lru_cache(maxsize=32)
def _placeholder_pattern(open_token: str, close_token: str) -> re.Pattern[str]:
    keys = "|".join(_PLACEHOLDER_KEYS)
    return re.compile(f"{re.escape(open_token)}({keys}){re.escape(close_token)}", re.IGNORECASE)


def render_template(
    template: str,
    values: Mapping[str, object],
    prefixes: Sequence[str] = ("",),
    open_token: str = "{{",
    close_token: str = "}}",
    rng: Optional[random.Random] = None,
) -> str:
    """Substitute ``x``, ``y``, ``z`` and ``p`` placeholders in one pass.

    The ``p`` placeholder takes one prefix picked at random from
    ``prefixes``; the same prefix is used for every ``p`` in the template.
    """
    if not template:
        return ""
    chooser = rng or random
    prefix = chooser.choice(list(prefixes)) if prefixes else ""
    substitutions = {key: str(values[key]) for key in ("x", "y", "z")}
    substitutions["p"] = prefix

    pattern = _placeholder_pattern(open_token, close_token)
    return pattern.sub(lambda m: substitutions[m.group(1).lower()], template)
