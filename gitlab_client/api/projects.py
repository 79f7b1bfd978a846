import threading
import warnings

from gitlab_client.exceptions import GitLabInvalidArgumentError
from gitlab_client.request_classes.project import ForkProject, ProjectCreate, ProjectUpdate
from gitlab_client.request_classes.queries import (
    ForkedProjectQuery,
    ProjectQuery,
    ProjectQueryScope,
    SingleProjectQuery,
)
from gitlab_client.resource_classes.project import Project
from gitlab_client.utils.pagination import LazyPageIterable
from gitlab_client.utils.polling import LANGUAGES_POLLING
from gitlab_client.utils.url import (
    add_order_by,
    add_parameter,
    check_page_size,
    check_positive_id,
    format_project_id,
)

from ._base import GitLabResourceAPI

PROJECTS_URL = "/projects"


class ProjectsAPI(GitLabResourceAPI):
    def accessible(self) -> LazyPageIterable[Project]:
        """Projects the authenticated user is a member of."""
        return self._get_all(add_order_by(add_parameter(PROJECTS_URL, "membership", True)), Project)

    def owned(self) -> LazyPageIterable[Project]:
        """Projects owned by the authenticated user."""
        return self._get_all(add_order_by(add_parameter(PROJECTS_URL, "owned", True)), Project)

    def visible(self) -> LazyPageIterable[Project]:
        """All projects visible to the authenticated user."""
        return self._get_all(add_order_by(PROJECTS_URL), Project)

    def __getitem__(self, key: int | str) -> Project:
        if isinstance(key, str):
            return self.get_by_full_name(key)
        return self.get_by_id(key)

    def get(
        self, query: ProjectQuery, limit: int | None = None, cancel: threading.Event | None = None
    ) -> LazyPageIterable[Project]:
        """List projects matching the query.

        Args:
            query: Filters and ordering of the listing.
            limit: Maximum number of projects to return. None returns all of them.
            cancel: Set this event to stop the enumeration before its next request.

        Returns:
            A lazy iterable, each iteration requests the pages again.
        """
        return self._get_all(self.create_get_url(query), Project, limit=limit, cancel=cancel)

    @classmethod
    def create_get_url(cls, query: ProjectQuery) -> str:
        url = PROJECTS_URL
        if query.user_id is not None:
            url = f"/users/{check_positive_id(query.user_id, 'user_id')}/projects"

        if query.scope is ProjectQueryScope.ACCESSIBLE:
            url = add_parameter(url, "membership", True)
        elif query.scope is ProjectQueryScope.OWNED:
            url = add_parameter(url, "owned", True)
        elif query.scope is ProjectQueryScope.VISIBLE:
            warnings.warn(
                "ProjectQueryScope.VISIBLE is deprecated, use ProjectQueryScope.ALL", DeprecationWarning, stacklevel=3
            )
        elif query.scope is not ProjectQueryScope.ALL:
            # All visible projects is the server default, so ALL adds nothing.
            raise GitLabInvalidArgumentError(f"Unsupported project scope {query.scope!r}")

        url = add_parameter(url, "archived", query.archived)
        url = add_order_by(url, query.order_by, supports_keyset=query.supports_keyset_pagination)
        url = add_parameter(url, "search", query.search)
        url = add_parameter(url, "simple", query.simple)
        url = add_parameter(url, "statistics", query.statistics)
        url = add_parameter(url, "per_page", check_page_size(query.per_page))

        if query.ascending is True:
            url = add_parameter(url, "sort", "asc")

        url = add_parameter(url, "visibility", query.visibility)
        url = add_parameter(url, "min_access_level", query.min_access_level)
        return url

    def get_by_id(self, id: int, query: SingleProjectQuery | None = None) -> Project:
        url = f"{PROJECTS_URL}/{check_positive_id(id, 'project id')}"
        if query is not None:
            url = add_parameter(url, "statistics", query.statistics)
        return self._get_one(url, Project)

    def get_by_full_name(self, full_name: str) -> Project:
        """Get a project by its full path, for example my-group/my-project."""
        return self._get_one(f"{PROJECTS_URL}/{format_project_id(full_name)}", Project)

    def create(self, project: ProjectCreate) -> Project:
        return self._post(PROJECTS_URL, project, Project)

    def update(self, id: int | str, project_update: ProjectUpdate) -> Project:
        return self._put(f"{PROJECTS_URL}/{format_project_id(id)}", project_update, Project)

    def delete(self, id: int | str) -> None:
        self._delete(f"{PROJECTS_URL}/{format_project_id(id)}")

    def fork(self, id: int | str, fork_project: ForkProject) -> Project:
        return self._post(f"{PROJECTS_URL}/{format_project_id(id)}/fork", fork_project, Project)

    def get_forks(
        self,
        id: int | str,
        query: ForkedProjectQuery | None = None,
        limit: int | None = None,
        cancel: threading.Event | None = None,
    ) -> LazyPageIterable[Project]:
        return self._get_all(self.create_get_forks_url(id, query), Project, limit=limit, cancel=cancel)

    @classmethod
    def create_get_forks_url(cls, id: int | str, query: ForkedProjectQuery | None) -> str:
        url = f"{PROJECTS_URL}/{format_project_id(id)}/forks"
        if query is None:
            return url
        url = add_parameter(url, "owned", query.owned)
        url = add_parameter(url, "archived", query.archived)
        url = add_parameter(url, "membership", query.membership)
        url = add_order_by(url, query.order_by, supports_keyset=query.supports_keyset_pagination)
        url = add_parameter(url, "search", query.search)
        url = add_parameter(url, "simple", query.simple)
        url = add_parameter(url, "statistics", query.statistics)
        url = add_parameter(url, "per_page", check_page_size(query.per_page))
        url = add_parameter(url, "visibility", query.visibility)
        url = add_parameter(url, "min_access_level", query.min_access_level)
        return url

    def get_languages(self, id: int | str) -> dict[str, float]:
        """Languages used in the project, as percentages by language name.

        Some GitLab versions return an empty result for a while after the project
        changed, so the call is repeated for up to 10 seconds until it is non-empty.
        """
        url = f"{PROJECTS_URL}/{format_project_id(id)}/languages"
        return LANGUAGES_POLLING.poll(lambda: self._get_one(url, dict[str, float]), is_done=bool)
