import sys
from typing import Literal

from rich.console import Console

from gitlab_client.api import EventsAPI, PackagesAPI, ProjectsAPI
from gitlab_client.config import GitLabClientConfig
from gitlab_client.http_client import HTTPClient

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


class GitLabClient:
    """Entry point to the GitLab REST API.

    All resource APIs share one HTTP connection pool, which is released by close().

    Examples:
        >>> with GitLabClient(GitLabClientConfig.from_environment()) as client:
        ...     for project in client.projects.owned():
        ...         print(project)
    """

    def __init__(self, config: GitLabClientConfig, console: Console | None = None) -> None:
        self._config = config
        self.console = console or Console()
        self.http_client = HTTPClient(config, console=self.console)
        self.projects = ProjectsAPI(self.http_client)
        self.packages = PackagesAPI(self.http_client)
        self.events = EventsAPI(self.http_client)

    @property
    def config(self) -> GitLabClientConfig:
        return self._config

    def close(self) -> None:
        self.http_client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc_value: BaseException | None, traceback: object | None
    ) -> Literal[False]:
        self.close()
        return False
