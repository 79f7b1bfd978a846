import threading

from gitlab_client.request_classes.queries import EventQuery
from gitlab_client.resource_classes.event import Event
from gitlab_client.utils.pagination import LazyPageIterable
from gitlab_client.utils.url import add_parameter, check_page, check_page_size, check_positive_id, format_project_id

from ._base import GitLabResourceAPI


class EventsAPI(GitLabResourceAPI):
    """User activity. The events endpoints only support offset pagination."""

    def get(
        self, query: EventQuery | None = None, limit: int | None = None, cancel: threading.Event | None = None
    ) -> LazyPageIterable[Event]:
        """Events of the authenticated user."""
        return self._get_all(self.create_get_url("/events", query), Event, limit=limit, cancel=cancel)

    def get_user_events(
        self,
        user_id: int,
        query: EventQuery | None = None,
        limit: int | None = None,
        cancel: threading.Event | None = None,
    ) -> LazyPageIterable[Event]:
        url = self.create_get_url(f"/users/{check_positive_id(user_id, 'user_id')}/events", query)
        return self._get_all(url, Event, limit=limit, cancel=cancel)

    def get_project_events(
        self,
        project_id: int | str,
        query: EventQuery | None = None,
        limit: int | None = None,
        cancel: threading.Event | None = None,
    ) -> LazyPageIterable[Event]:
        url = self.create_get_url(f"/projects/{format_project_id(project_id)}/events", query)
        return self._get_all(url, Event, limit=limit, cancel=cancel)

    @classmethod
    def create_get_url(cls, path: str, query: EventQuery | None) -> str:
        if query is None:
            return path
        url = add_parameter(path, "action", query.action)
        url = add_parameter(url, "target_type", query.target_type)
        url = add_parameter(url, "before", query.before)
        url = add_parameter(url, "after", query.after)
        url = add_parameter(url, "sort", query.sort)
        url = add_parameter(url, "scope", query.scope)
        url = add_parameter(url, "page", check_page(query.page))
        url = add_parameter(url, "per_page", check_page_size(query.per_page))
        return url
