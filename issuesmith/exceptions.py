"""
Exception hierarchy for IssueSmith.

Every tool invocation either returns a complete result or raises one of
these errors; nothing is retried or partially reported.
"""

from typing import Optional


class IssueSmithError(Exception):
    """Base class for all IssueSmith errors."""


class ConfigurationError(IssueSmithError):
    """A required setting or credential is missing."""


class AuthenticationError(ConfigurationError):
    """No GitHub credential is configured for an operation that needs one."""


class InvalidRequestError(IssueSmithError):
    """A tool request failed validation."""


class UnknownToolError(IssueSmithError):
    """No tool is registered under the requested id."""


class RemoteApiError(IssueSmithError):
    """A remote API answered with a non-2xx status or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NotFoundError(RemoteApiError):
    """The requested repository, path or issue does not exist."""


class RemoteWriteError(RemoteApiError):
    """Writing a file to the repository failed."""


class MalformedResponseError(IssueSmithError):
    """The completion API returned output that does not match the expected shape."""
