"""Pathgate error hierarchy.

All pathgate-specific errors inherit from PathgateError for easy catching.
"No route matches" is never an error; the core reports it as ``None``.
"""


class PathgateError(Exception):
    """Base error for all pathgate operations."""


class ConfigError(PathgateError):
    """Invalid or unreadable configuration."""


class ManifestError(PathgateError):
    """A route manifest that cannot be turned into a route tree."""


class RoutesError(PathgateError):
    """A routes directory that cannot be scanned into a route tree."""


class NoRouteError(PathgateError):
    """Raised by ``RouteTable.requires_login`` when no route matches."""

    def __init__(self, path: str) -> None:
        super().__init__(f"No route matches {path!r}")
        self.path = path


class MalformedPathError(PathgateError):
    """A path component carries invalid percent-encoding.

    Distinct from "no match": the path is client-supplied garbage rather
    than an unroutable but valid path.

    Attributes:
        segment: The raw (undecoded) component that failed to decode.

    """

    def __init__(self, segment: str, reason: str) -> None:
        super().__init__(f"Malformed path segment {segment!r}: {reason}")
        self.segment = segment
        self.reason = reason
