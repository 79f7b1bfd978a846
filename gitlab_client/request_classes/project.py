from gitlab_client._resource_base import RequestResource
from gitlab_client.resource_classes.project import VisibilityLevel


class ProjectCreate(RequestResource):
    name: str
    path: str | None = None
    namespace_id: int | None = None
    description: str | None = None
    default_branch: str | None = None
    visibility: VisibilityLevel | None = None
    initialize_with_readme: bool | None = None
    issues_enabled: bool | None = None
    merge_requests_enabled: bool | None = None
    wiki_enabled: bool | None = None
    snippets_enabled: bool | None = None
    lfs_enabled: bool | None = None
    topics: list[str] | None = None


class ProjectUpdate(RequestResource):
    name: str | None = None
    path: str | None = None
    description: str | None = None
    default_branch: str | None = None
    visibility: VisibilityLevel | None = None
    issues_enabled: bool | None = None
    merge_requests_enabled: bool | None = None
    wiki_enabled: bool | None = None
    snippets_enabled: bool | None = None
    lfs_enabled: bool | None = None
    topics: list[str] | None = None


class ForkProject(RequestResource):
    namespace_id: int | None = None
    namespace_path: str | None = None
    name: str | None = None
    path: str | None = None
    description: str | None = None
    visibility: VisibilityLevel | None = None
    branches: str | None = None
