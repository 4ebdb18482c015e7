"""
Exceptions raised while resolving, fetching, installing and launching artifacts.

Everything derives from `ManagerError` so callers that only need to report a
failure and move on to the next artifact can catch a single type.
"""


class ManagerError(Exception):
    """Base class for all wdmanager failures."""


class ConfigurationError(ManagerError):
    """No download exists for the artifact on this platform."""


class TransportError(ManagerError):
    """The download failed below HTTP (DNS, TLS, connection reset, timeout)."""

    def __init__(self, url: str, detail: str):
        super().__init__(f"Download of '{url}' failed: {detail}")
        self.url = url
        self.detail = detail


class RemoteStatusError(ManagerError):
    """The server answered with a non-success HTTP status."""

    def __init__(self, url: str, status_code: int):
        super().__init__(f"Download of '{url}' failed with HTTP status {status_code}")
        self.url = url
        self.status_code = status_code


class InstallError(ManagerError):
    """The downloaded archive could not be extracted."""


class PreconditionError(ManagerError):
    """A required artifact is missing, so the command cannot proceed."""
