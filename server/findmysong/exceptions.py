"""Error taxonomy shared by the services and translated to HTTP by the routes."""


class FindMySongError(Exception):
    """Base class for every error raised by the findmysong services."""


class ValidationError(FindMySongError):
    """Missing or blank required input."""


class ConfigurationError(FindMySongError):
    """A required secret or credential is not configured."""


class CredentialError(FindMySongError):
    """The client-credentials exchange with the identity provider failed."""


class UpstreamError(FindMySongError):
    """A single call to an upstream service failed."""
