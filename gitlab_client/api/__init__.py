from ._base import GitLabResourceAPI
from .events import EventsAPI
from .packages import PackagesAPI
from .projects import ProjectsAPI

__all__ = ["EventsAPI", "GitLabResourceAPI", "PackagesAPI", "ProjectsAPI"]
