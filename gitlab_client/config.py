import os
from pathlib import Path
from typing import Literal, TypeAlias, get_args

from dotenv import load_dotenv

from gitlab_client._warnings import LowSeverityWarning
from gitlab_client.exceptions import GitLabConfigError

AuthType: TypeAlias = Literal["private_token", "oauth"]

DEFAULT_PER_PAGE = 100
MAX_PER_PAGE = 100


class GitLabClientConfig:
    """Configuration for the GitLab client.

    Args:
        base_url (str): The URL of the GitLab instance, for example https://gitlab.example.com.
        token (str | None): Personal/project access token or OAuth token. Anonymous requests when None.
        auth_type (AuthType): "private_token" sends the PRIVATE-TOKEN header, "oauth" sends a Bearer token.
        client_name (str): Sent as part of the User-Agent header.
        timeout (int): Request timeout in seconds.
        max_retries (int): Number of times the transport retries throttled or unavailable responses.
        default_per_page (int): Page size used by listings that do not set per_page themselves.
        headers (dict[str, str] | None): Extra headers added to every request.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        auth_type: AuthType = "private_token",
        client_name: str = "gitlab-client",
        timeout: int = 30,
        max_retries: int = 3,
        default_per_page: int = DEFAULT_PER_PAGE,
        headers: dict[str, str] | None = None,
    ) -> None:
        if not base_url:
            raise GitLabConfigError("base_url must be a non-empty string")
        if auth_type not in get_args(AuthType):
            raise GitLabConfigError(f"Unsupported auth_type {auth_type!r}. Expected one of {get_args(AuthType)}")
        if not (0 < default_per_page <= MAX_PER_PAGE):
            raise GitLabConfigError(f"default_per_page must be between 1 and {MAX_PER_PAGE}, got {default_per_page}")
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.auth_type = auth_type
        self.client_name = client_name
        self.timeout = timeout
        self.max_retries = max_retries
        self.default_per_page = default_per_page
        self.headers = dict(headers or {})

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.base_url!r}, auth_type={self.auth_type!r})"

    @property
    def base_api_url(self) -> str:
        return f"{self.base_url}/api/v4"

    def create_api_url(self, endpoint: str) -> str:
        """Create a full API URL for the given endpoint.

        Args:
            endpoint (str): The API endpoint, optionally with a query string.

        Returns:
            str: The full API URL.

        Examples:
            >>> config = GitLabClientConfig("https://gitlab.example.com")
            >>> config.create_api_url("/projects?owned=true")
            "https://gitlab.example.com/api/v4/projects?owned=true"
        """
        if not endpoint.startswith("/"):
            endpoint = f"/{endpoint}"
        return f"{self.base_api_url}{endpoint}"

    def authorization_header(self) -> tuple[str, str] | None:
        if self.token is None:
            return None
        if self.auth_type == "oauth":
            return "Authorization", f"Bearer {self.token}"
        return "PRIVATE-TOKEN", self.token

    @classmethod
    def from_environment(cls, env_file: Path | None = None, override: bool = False) -> "GitLabClientConfig":
        """Create a config from GITLAB_* environment variables.

        Args:
            env_file: Optional .env file loaded before the environment is read.
            override: Whether values in the .env file override variables already set.
        """
        if env_file is not None:
            if not env_file.is_file():
                raise GitLabConfigError(f"Environment file {env_file.as_posix()!r} does not exist")
            if not load_dotenv(env_file, override=override):
                LowSeverityWarning(f"No environment variables found in {env_file.as_posix()!r}").print_warning()

        if "GITLAB_URL" not in os.environ:
            raise GitLabConfigError("Missing environment variable GITLAB_URL")
        return cls(
            base_url=os.environ["GITLAB_URL"],
            token=os.environ.get("GITLAB_TOKEN") or None,
            auth_type=os.environ.get("GITLAB_AUTH_TYPE", "private_token"),  # type: ignore[arg-type]
            timeout=_read_int("GITLAB_TIMEOUT", 30),
            max_retries=_read_int("GITLAB_MAX_RETRIES", 3),
            default_per_page=_read_int("GITLAB_PER_PAGE", DEFAULT_PER_PAGE),
        )


def _read_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise GitLabConfigError(f"Environment variable {name} must be an integer, got {raw!r}") from e
