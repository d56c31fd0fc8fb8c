"""
Exception types raised by the safe routing engine.

Only InvalidInputError is meant to reach callers. The others are raised by
collaborators and components and absorbed by the optimizer or service, which
degrade to a best-effort route instead of failing the request.
"""


class SafeRoutingError(Exception):
    """Base class for safe routing errors."""


class InvalidInputError(SafeRoutingError, ValueError):
    """Missing, non-numeric or out-of-range coordinates in a route request."""


class DataSourceError(SafeRoutingError):
    """The incident data source could not be read."""


class DegenerateRouteError(SafeRoutingError, ValueError):
    """A route with fewer than two points was handed to the scorer."""


class PersistenceError(SafeRoutingError):
    """A route history write failed."""
