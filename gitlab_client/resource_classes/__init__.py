from .access_level import AccessLevel
from .dynamic_enum import DynamicEnum
from .event import Event, EventAction, EventTargetType, Note, PushData
from .package import Package, PackageLinks, PackageSearchResult, PackageStatus, PackageType
from .project import (
    ForkedFromProject,
    MemberAccess,
    Namespace,
    Project,
    ProjectOwner,
    ProjectPermissions,
    ProjectStatistics,
    VisibilityLevel,
)

__all__ = [
    "AccessLevel",
    "DynamicEnum",
    "Event",
    "EventAction",
    "EventTargetType",
    "ForkedFromProject",
    "MemberAccess",
    "Namespace",
    "Note",
    "Package",
    "PackageLinks",
    "PackageSearchResult",
    "PackageStatus",
    "PackageType",
    "Project",
    "ProjectOwner",
    "ProjectPermissions",
    "ProjectStatistics",
    "PushData",
    "VisibilityLevel",
]
