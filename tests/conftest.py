from collections.abc import Iterator

import pytest
import respx
from rich.console import Console

from gitlab_client import GitLabClient, GitLabClientConfig
from gitlab_client.http_client import HTTPClient

BASE_URL = "https://gitlab.example.com"
API_URL = f"{BASE_URL}/api/v4"


@pytest.fixture
def gitlab_config() -> GitLabClientConfig:
    return GitLabClientConfig(base_url=BASE_URL, token="glpat-dummy", max_retries=2)


@pytest.fixture
def http_client(gitlab_config: GitLabClientConfig) -> Iterator[HTTPClient]:
    with HTTPClient(gitlab_config) as client:
        yield client


@pytest.fixture
def gitlab_client(gitlab_config: GitLabClientConfig) -> Iterator[GitLabClient]:
    with GitLabClient(gitlab_config, console=Console(quiet=True)) as client:
        yield client


@pytest.fixture
def rsps() -> Iterator[respx.MockRouter]:
    with respx.mock(assert_all_called=False) as rsps:
        yield rsps
