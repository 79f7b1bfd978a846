from datetime import datetime
from enum import Enum

from gitlab_client._resource_base import BaseModelObject

from .access_level import AccessLevel


class VisibilityLevel(str, Enum):
    PRIVATE = "private"
    INTERNAL = "internal"
    PUBLIC = "public"


class Namespace(BaseModelObject):
    id: int
    name: str
    path: str
    kind: str | None = None
    full_path: str | None = None
    parent_id: int | None = None
    web_url: str | None = None


class ProjectOwner(BaseModelObject):
    id: int
    username: str
    name: str | None = None
    web_url: str | None = None


class ProjectStatistics(BaseModelObject):
    commit_count: int | None = None
    storage_size: int | None = None
    repository_size: int | None = None
    wiki_size: int | None = None
    lfs_objects_size: int | None = None
    job_artifacts_size: int | None = None
    packages_size: int | None = None


class MemberAccess(BaseModelObject):
    access_level: AccessLevel
    notification_level: int | None = None


class ProjectPermissions(BaseModelObject):
    project_access: MemberAccess | None = None
    group_access: MemberAccess | None = None


class ForkedFromProject(BaseModelObject):
    id: int
    name: str | None = None
    path_with_namespace: str | None = None
    web_url: str | None = None


class Project(BaseModelObject):
    id: int
    name: str
    path: str | None = None
    name_with_namespace: str | None = None
    path_with_namespace: str | None = None
    description: str | None = None
    default_branch: str | None = None
    visibility: VisibilityLevel | None = None
    archived: bool | None = None
    web_url: str | None = None
    ssh_url_to_repo: str | None = None
    http_url_to_repo: str | None = None
    created_at: datetime | None = None
    last_activity_at: datetime | None = None
    creator_id: int | None = None
    forks_count: int | None = None
    star_count: int | None = None
    open_issues_count: int | None = None
    topics: list[str] | None = None
    namespace: Namespace | None = None
    owner: ProjectOwner | None = None
    statistics: ProjectStatistics | None = None
    permissions: ProjectPermissions | None = None
    forked_from_project: ForkedFromProject | None = None

    def __str__(self) -> str:
        return self.path_with_namespace or self.name
