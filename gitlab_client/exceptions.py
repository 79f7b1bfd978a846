from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gitlab_client.http_client import ErrorDetails


class GitLabError(Exception):
    def __repr__(self) -> str:
        # Repr is what is called by rich when the exception is printed.
        return str(self)


class GitLabConfigError(GitLabError):
    pass


class GitLabInvalidArgumentError(GitLabError, ValueError):
    """Raised for a malformed query or identifier, before any request is sent."""


class GitLabCancelledError(GitLabError):
    """Raised when an enumeration is cancelled through its cancel signal."""


class GitLabAPIError(GitLabError):
    """Base class for all failures reported by, or on the way to, the GitLab API."""

    def __init__(
        self,
        message: str,
        code: int | None = None,
        error_details: ErrorDetails | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = error_details


class GitLabNotFoundError(GitLabAPIError):
    """The server answered 404."""


class GitLabConflictError(GitLabAPIError):
    """The server answered 409, for example when a package file already exists."""


class GitLabTransportError(GitLabAPIError):
    """Network failure, timeout, or any other non-successful response."""
