from ._client import GitLabClient
from ._version import __version__
from .config import GitLabClientConfig
from .exceptions import (
    GitLabAPIError,
    GitLabCancelledError,
    GitLabConfigError,
    GitLabConflictError,
    GitLabError,
    GitLabInvalidArgumentError,
    GitLabNotFoundError,
    GitLabTransportError,
)

__all__ = [
    "GitLabAPIError",
    "GitLabCancelledError",
    "GitLabClient",
    "GitLabClientConfig",
    "GitLabConfigError",
    "GitLabConflictError",
    "GitLabError",
    "GitLabInvalidArgumentError",
    "GitLabNotFoundError",
    "GitLabTransportError",
    "__version__",
]
