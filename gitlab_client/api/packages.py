import logging
import threading

from pydantic import TypeAdapter

from gitlab_client.request_classes.package import PackagePublish
from gitlab_client.request_classes.queries import PackageQuery
from gitlab_client.resource_classes.package import Package, PackageSearchResult, PackageType
from gitlab_client.utils.pagination import LazyPageIterable
from gitlab_client.utils.url import (
    add_parameter,
    check_page,
    check_page_size,
    check_positive_id,
    encode_path_segment,
    format_project_id,
)

from ._base import GitLabResourceAPI

logger = logging.getLogger(__name__)


class PackagesAPI(GitLabResourceAPI):
    def publish_generic_package(self, project_id: int | str, package: PackagePublish) -> Package:
        """Upload a file to the generic package registry of a project.

        The server rejects a second upload of the same name, version and file name
        with HTTP 409, which is raised as GitLabConflictError.
        """
        url = self.create_publish_url(project_id, package)
        content = package.read_content()
        logger.debug("Publishing %s (%d bytes) to %s", package.file_name, len(content), url)
        response = self._request("PUT", url, data=content, content_type="application/octet-stream")
        return TypeAdapter(Package).validate_json(response.body)

    @classmethod
    def create_publish_url(cls, project_id: int | str, package: PackagePublish) -> str:
        url = (
            f"/projects/{format_project_id(project_id)}/packages/generic/"
            f"{encode_path_segment(package.package_name)}/"
            f"{encode_path_segment(package.package_version)}/"
            f"{encode_path_segment(package.file_name)}"
        )
        url = add_parameter(url, "status", package.status)
        # Without select=package_file the server answers with an empty body.
        return add_parameter(url, "select", "package_file")

    def get(
        self,
        project_id: int | str,
        query: PackageQuery | None = None,
        limit: int | None = None,
        cancel: threading.Event | None = None,
    ) -> LazyPageIterable[PackageSearchResult]:
        url = self.create_get_url(project_id, query or PackageQuery())
        return self._get_all(url, PackageSearchResult, limit=limit, cancel=cancel)

    @classmethod
    def create_get_url(cls, project_id: int | str, query: PackageQuery) -> str:
        url = f"/projects/{format_project_id(project_id)}/packages"
        url = add_parameter(url, "order_by", query.order_by)
        url = add_parameter(url, "sort", query.sort)
        url = add_parameter(url, "status", query.status)
        url = add_parameter(url, "page", check_page(query.page))
        url = add_parameter(url, "per_page", check_page_size(query.per_page))
        if query.package_type is not PackageType.ALL:
            url = add_parameter(url, "package_type", query.package_type)
        url = add_parameter(url, "package_name", query.package_name)
        if query.include_versionless:
            url = add_parameter(url, "include_versionless", True)
        return url

    def get_by_id(self, project_id: int | str, package_id: int) -> PackageSearchResult:
        url = f"/projects/{format_project_id(project_id)}/packages/{check_positive_id(package_id, 'package id')}"
        return self._get_one(url, PackageSearchResult)
