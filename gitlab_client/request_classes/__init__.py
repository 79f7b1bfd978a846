from .package import PackagePublish
from .project import ForkProject, ProjectCreate, ProjectUpdate
from .queries import (
    EventActionFilter,
    EventQuery,
    EventTargetFilter,
    ForkedProjectQuery,
    PackageOrderBy,
    PackageQuery,
    ProjectOrderBy,
    ProjectQuery,
    ProjectQueryScope,
    SingleProjectQuery,
    SortOrder,
)

__all__ = [
    "EventActionFilter",
    "EventQuery",
    "EventTargetFilter",
    "ForkProject",
    "ForkedProjectQuery",
    "PackageOrderBy",
    "PackagePublish",
    "PackageQuery",
    "ProjectCreate",
    "ProjectOrderBy",
    "ProjectQuery",
    "ProjectQueryScope",
    "ProjectUpdate",
    "SingleProjectQuery",
    "SortOrder",
]
