"""Errors raised by tile coordinate parsing and navigation."""

from __future__ import annotations


class TileCoordinateError(ValueError):
    """Base class for invalid tile coordinate input."""


class InvalidUrl(TileCoordinateError):
    """No known tile URL layout could be found in the string."""


class InvalidTilePath(TileCoordinateError):
    """A QuadKey or descendant path holds a character outside 0-3."""


class InvalidZoom(TileCoordinateError):
    """A navigation step would leave the valid zoom range."""
