"""Exceptions raised by the geotrack processing core."""

from __future__ import annotations


class GeotrackError(Exception):
    """Base class for errors that halt a processing run."""


class InvalidInputShape(GeotrackError):
    """Raised when the raw input is not a sequence of point records."""


class NoValidData(GeotrackError):
    """Raised when cleaning leaves no usable points."""
