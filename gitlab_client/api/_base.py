"""Base class for resource clients.

A resource client maps one GitLab resource to its URL templates. Each operation
builds a URL, sends a single request through the HTTP client, and parses the
response. List operations return a LazyPageIterable instead of a list.
"""

import threading
from typing import Literal, TypeVar

from pydantic import TypeAdapter

from gitlab_client._resource_base import RequestResource
from gitlab_client.http_client import HTTPClient, RequestMessage, SuccessResponse
from gitlab_client.utils.pagination import LazyPageIterable

T = TypeVar("T")


class GitLabResourceAPI:
    def __init__(self, http_client: HTTPClient) -> None:
        self._http_client = http_client

    def _make_url(self, path: str) -> str:
        """Create the full URL for a path relative to the API root."""
        return self._http_client.config.create_api_url(path)

    def _request(
        self,
        method: Literal["GET", "POST", "PUT", "DELETE"],
        path: str,
        body: RequestResource | None = None,
        data: bytes | None = None,
        content_type: str = "application/json",
    ) -> SuccessResponse:
        request = RequestMessage(
            endpoint_url=self._make_url(path),
            method=method,
            body_content=body.as_body() if body is not None else None,
            data_content=data,
            content_type=content_type,
        )
        return self._http_client.request_single_retries(request).get_success_or_raise()

    def _get_one(self, path: str, response_type: type[T]) -> T:
        response = self._request("GET", path)
        return TypeAdapter(response_type).validate_json(response.body)

    def _get_all(
        self, path: str, item_type: type[T], limit: int | None = None, cancel: threading.Event | None = None
    ) -> LazyPageIterable[T]:
        return LazyPageIterable(self._http_client, self._make_url(path), item_type, limit=limit, cancel=cancel)

    def _post(self, path: str, body: RequestResource | None, response_type: type[T]) -> T:
        response = self._request("POST", path, body=body)
        return TypeAdapter(response_type).validate_json(response.body)

    def _put(self, path: str, body: RequestResource, response_type: type[T]) -> T:
        response = self._request("PUT", path, body=body)
        return TypeAdapter(response_type).validate_json(response.body)

    def _delete(self, path: str) -> None:
        self._request("DELETE", path)
