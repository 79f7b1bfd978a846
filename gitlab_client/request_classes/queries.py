from datetime import date
from enum import Enum

from gitlab_client.resource_classes.access_level import AccessLevel
from gitlab_client.resource_classes.package import PackageStatus, PackageType
from gitlab_client.resource_classes.project import VisibilityLevel

from .base import BaseModelRequest


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ProjectQueryScope(str, Enum):
    # Projects the authenticated user is a member of.
    ACCESSIBLE = "accessible"
    OWNED = "owned"
    # Deprecated, same as ALL.
    VISIBLE = "visible"
    # All projects visible to the authenticated user. This is the server default.
    ALL = "all"


class ProjectOrderBy(str, Enum):
    ID = "id"
    NAME = "name"
    PATH = "path"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    LAST_ACTIVITY_AT = "last_activity_at"
    SIMILARITY = "similarity"
    STAR_COUNT = "star_count"


class ProjectQuery(BaseModelRequest):
    scope: ProjectQueryScope = ProjectQueryScope.ALL
    user_id: int | None = None
    archived: bool | None = None
    order_by: ProjectOrderBy | str | None = None
    search: str | None = None
    simple: bool | None = None
    statistics: bool | None = None
    per_page: int | None = None
    ascending: bool | None = None
    visibility: VisibilityLevel | None = None
    min_access_level: AccessLevel | None = None

    @property
    def supports_keyset_pagination(self) -> bool:
        # Search results are not stable under keyset paging.
        return not (self.search and self.search.strip())


class SingleProjectQuery(BaseModelRequest):
    statistics: bool | None = None


class ForkedProjectQuery(BaseModelRequest):
    owned: bool | None = None
    archived: bool | None = None
    membership: bool | None = None
    order_by: ProjectOrderBy | str | None = None
    search: str | None = None
    simple: bool | None = None
    statistics: bool | None = None
    per_page: int | None = None
    visibility: VisibilityLevel | None = None
    min_access_level: AccessLevel | None = None

    @property
    def supports_keyset_pagination(self) -> bool:
        return not (self.search and self.search.strip())


class PackageOrderBy(str, Enum):
    CREATED_AT = "created_at"
    NAME = "name"
    VERSION = "version"
    TYPE = "type"


class PackageQuery(BaseModelRequest):
    order_by: PackageOrderBy | None = None
    sort: SortOrder | None = None
    status: PackageStatus | None = None
    page: int | None = None
    per_page: int | None = None
    package_type: PackageType = PackageType.ALL
    package_name: str | None = None
    include_versionless: bool = False


class EventActionFilter(str, Enum):
    """Values accepted by the action filter of the events endpoints."""

    APPROVED = "approved"
    CLOSED = "closed"
    COMMENTED = "commented"
    CREATED = "created"
    DESTROYED = "destroyed"
    EXPIRED = "expired"
    JOINED = "joined"
    LEFT = "left"
    MERGED = "merged"
    PUSHED = "pushed"
    REOPENED = "reopened"
    UPDATED = "updated"


class EventTargetFilter(str, Enum):
    """Values accepted by the target_type filter of the events endpoints."""

    EPIC = "epic"
    ISSUE = "issue"
    MERGE_REQUEST = "merge_request"
    MILESTONE = "milestone"
    NOTE = "note"
    PROJECT = "project"
    SNIPPET = "snippet"
    USER = "user"


class EventQuery(BaseModelRequest):
    action: EventActionFilter | None = None
    target_type: EventTargetFilter | None = None
    # Only events created strictly before/after these dates are returned.
    before: date | None = None
    after: date | None = None
    sort: SortOrder | None = None
    scope: str | None = None
    page: int | None = None
    per_page: int | None = None
