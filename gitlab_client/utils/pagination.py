"""Lazy enumeration of GitLab list endpoints.

GitLab pages list results either by offset (page/per_page) or by keyset (an id
cursor, requested with pagination=keyset). A LazyPageIterable fetches one page at
a time and yields its items before asking for the next page. Every call to
iter() starts over with its own PageCursor, so the same iterable can be
enumerated several times, also from different threads.
"""

import logging
import threading
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeAlias, TypeVar

import httpx
from pydantic import TypeAdapter

from gitlab_client.exceptions import GitLabCancelledError, GitLabTransportError
from gitlab_client.http_client import HTTPClient, RequestMessage, SuccessResponse
from gitlab_client.utils.url import add_parameter, check_page, check_page_size

logger = logging.getLogger(__name__)

T = TypeVar("T")

PaginationMode: TypeAlias = Literal["offset", "keyset"]

_CURSOR_PARAMETERS = frozenset({"page", "per_page", "id_after", "id_before"})


@dataclass
class PageCursor:
    """Position of one enumeration. Owned by a single iterator and never shared."""

    mode: PaginationMode
    per_page: int
    page: int = 1
    ascending: bool = False
    last_id: int | str | None = None
    fetch_count: int = 0

    @classmethod
    def from_url(cls, url: str, default_per_page: int) -> "PageCursor":
        parameters = dict(_split_query(url))
        mode: PaginationMode = "keyset" if parameters.get("pagination") == "keyset" else "offset"
        return cls(
            mode=mode,
            per_page=check_page_size(_parse_int(parameters, "per_page")) or default_per_page,
            page=check_page(_parse_int(parameters, "page")) or 1,
            ascending=parameters.get("sort") == "asc",
        )

    def first_url(self, url: str) -> str:
        if "per_page" in dict(_split_query(url)):
            return url
        return add_parameter(url, "per_page", self.per_page)

    def advance(self, url: str, response: SuccessResponse, items: list[Any]) -> str | None:
        """Move the cursor past the page just fetched.

        Returns:
            The URL of the next page, or None when the enumeration is complete.
        """
        if len(items) < self.per_page:
            # Empty or short page, this is the last one.
            return None
        if response.has_link_header:
            if response.next_link is None:
                return None
            return str(httpx.URL(url).join(response.next_link))
        next_page = response.next_page_header
        if next_page is not None and not next_page.strip():
            return None

        if self.mode == "keyset":
            self.last_id = _item_id(items[-1])
            return _replace_parameters(
                url,
                {
                    "per_page": self.per_page,
                    "id_after" if self.ascending else "id_before": self.last_id,
                },
            )
        if next_page is not None and next_page.strip().isdigit():
            self.page = int(next_page)
        else:
            self.page += 1
        return _replace_parameters(url, {"page": self.page, "per_page": self.per_page})


class LazyPageIterable(Iterable[T], Generic[T]):
    """An iterable over all items of a GitLab list endpoint.

    Args:
        http_client: The transport used to fetch pages.
        url: Full URL of the first page, including the query built for the listing.
        item_type: The type each JSON item is validated into.
        limit: Stop after this many items. None means all items.
        cancel: When set, the next fetch raises GitLabCancelledError instead of being sent.
    """

    def __init__(
        self,
        http_client: HTTPClient,
        url: str,
        item_type: type[T],
        limit: int | None = None,
        cancel: threading.Event | None = None,
    ) -> None:
        self._http_client = http_client
        self._url = url
        self._adapter = TypeAdapter(list[item_type])  # type: ignore[valid-type]
        self._limit = limit
        self._cancel = cancel

    @property
    def url(self) -> str:
        return self._url

    def __repr__(self) -> str:
        return f"{type(self).__name__}(url={self._url!r})"

    def __iter__(self) -> Iterator[T]:
        cursor = PageCursor.from_url(self._url, self._http_client.config.default_per_page)
        return self._iterate(cursor)

    def _iterate(self, cursor: PageCursor) -> Iterator[T]:
        if self._limit is not None and self._limit <= 0:
            return
        request_url: str | None = cursor.first_url(self._url)
        yielded = 0
        while request_url is not None:
            if self._cancel is not None and self._cancel.is_set():
                raise GitLabCancelledError(f"Enumeration of {self._url} was cancelled")
            response = self._fetch(request_url)
            cursor.fetch_count += 1
            items = self._parse(response)
            logger.debug("Fetched page %d with %d items from %s", cursor.fetch_count, len(items), request_url)
            for item in items:
                yield item
                yielded += 1
                if self._limit is not None and yielded >= self._limit:
                    return
            request_url = cursor.advance(request_url, response, items)

    def _fetch(self, url: str) -> SuccessResponse:
        result = self._http_client.request_single_retries(RequestMessage(endpoint_url=url, method="GET"), self._cancel)
        return result.get_success_or_raise()

    def _parse(self, response: SuccessResponse) -> list[T]:
        body = response.body_json
        if not isinstance(body, list):
            raise GitLabTransportError(
                f"Expected a JSON array from a list endpoint, got {type(body).__name__}", code=response.status_code
            )
        return self._adapter.validate_python(body)


def _split_query(url: str) -> list[tuple[str, str]]:
    if "?" not in url:
        return []
    query = url.split("?", 1)[1]
    pairs = []
    for part in query.split("&"):
        if not part:
            continue
        name, _, value = part.partition("=")
        pairs.append((name, value))
    return pairs


def _replace_parameters(url: str, values: dict[str, Any]) -> str:
    """Drop cursor parameters from url and append the given ones, keeping other parameters as they are."""
    path, _, query = url.partition("?")
    kept = [part for part in query.split("&") if part and part.partition("=")[0] not in _CURSOR_PARAMETERS]
    new_url = f"{path}?{'&'.join(kept)}" if kept else path
    for name, value in values.items():
        new_url = add_parameter(new_url, name, value)
    return new_url


def _parse_int(parameters: dict[str, str], name: str) -> int | None:
    if name not in parameters:
        return None
    try:
        return int(parameters[name])
    except ValueError:
        return None


def _item_id(item: Any) -> int | str:
    identifier = item.get("id") if isinstance(item, dict) else getattr(item, "id", None)
    if identifier is None:
        raise GitLabTransportError("Keyset pagination requires every item to have an id")
    return identifier
