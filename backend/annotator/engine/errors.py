"""Engine exception types."""

from __future__ import annotations


class InvalidBoundsError(ValueError):
    """A semantic element was registered with a malformed bounding box."""


class OracleError(Exception):
    """Base class for tier-3 oracle failures. Never escapes the resolver."""


class OracleUnavailable(OracleError):
    """The oracle could not be reached or is not configured."""


class OracleMalformedResponse(OracleError):
    """The oracle answered with something that is not a bounding box."""
