"""Exception hierarchy for template source resolution.

Per-source fetch failures are captured in the resolution report; only the
errors below ever cross the resolver boundary.
"""


class NitError(Exception):
    """Base class for all nit errors."""


class InvalidSourceError(NitError):
    """A source record has an empty uri."""


class FetchError(NitError):
    """A collection listing could not be fetched.

    Raised by fetchers. The resolver never lets it escape; it is recorded as
    the failing source's outcome instead.
    """

    def __init__(self, uri: str, reason: str):
        self.uri = uri
        self.reason = reason
        super().__init__(f"Failed to fetch '{uri}': {reason}")


class NoSourcesError(NitError):
    """The resolver was asked to resolve an empty source list."""

    def __init__(self, message: str = "No template sources configured"):
        super().__init__(message)


class AmbiguousOrMissingError(NitError):
    """A requested identifier does not resolve to exactly one catalog entry."""

    def __init__(self, identifier: str, message: str):
        self.identifier = identifier
        super().__init__(message)


class ConfigurationError(NitError):
    """The settings file is missing or invalid."""


class MaterializeError(NitError):
    """A template could not be instantiated into the target directory."""
