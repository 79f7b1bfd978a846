import threading
from typing import Any

import httpx
import pytest
import respx

from gitlab_client.exceptions import GitLabCancelledError, GitLabNotFoundError, GitLabTransportError
from gitlab_client.http_client import HTTPClient, SuccessResponse
from gitlab_client.resource_classes import Event
from gitlab_client.utils.pagination import LazyPageIterable, PageCursor

API_URL = "https://gitlab.example.com/api/v4"
EVENTS_URL = f"{API_URL}/events"
PROJECTS_URL = f"{API_URL}/projects"


def page(ids: list[int], headers: dict[str, str] | None = None, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=[{"id": id_} for id_ in ids], headers=headers or {})


def ids_of(items: list[dict[str, Any]]) -> list[int]:
    return [item["id"] for item in items]


class TestOffsetPagination:
    @pytest.mark.parametrize(
        "pages, expected_ids",
        [
            pytest.param(
                [
                    page([1, 2], {"X-Next-Page": "2"}),
                    page([3, 4], {"X-Next-Page": "3"}),
                    page([5], {"X-Next-Page": ""}),
                ],
                [1, 2, 3, 4, 5],
                id="5 items 2 per page",
            ),
            pytest.param(
                [page([1, 2], {"X-Next-Page": "2"}), page([3, 4], {"X-Next-Page": ""})],
                [1, 2, 3, 4],
                id="4 items 2 per page",
            ),
            pytest.param([page([1], {"X-Next-Page": ""})], [1], id="single short page"),
        ],
    )
    def test_fetches_once_per_page(
        self, pages: list[httpx.Response], expected_ids: list[int], http_client: HTTPClient, rsps: respx.MockRouter
    ) -> None:
        route = rsps.get(EVENTS_URL).mock(side_effect=pages)

        items = list(LazyPageIterable(http_client, f"{EVENTS_URL}?per_page=2", dict))

        assert ids_of(items) == expected_ids
        assert route.call_count == len(pages)
        expected_pages = [None, *(str(number) for number in range(2, len(pages) + 1))]
        assert [call.request.url.params.get("page") for call in route.calls] == expected_pages

    def test_empty_result_single_fetch(self, http_client: HTTPClient, rsps: respx.MockRouter) -> None:
        route = rsps.get(EVENTS_URL).mock(side_effect=[page([])])

        items = list(LazyPageIterable(http_client, EVENTS_URL, dict))

        assert items == []
        assert route.call_count == 1

    def test_short_second_page_ends_enumeration(self, http_client: HTTPClient, rsps: respx.MockRouter) -> None:
        route = rsps.get(EVENTS_URL).mock(side_effect=[page([1, 2]), page([3])])

        items = list(LazyPageIterable(http_client, f"{EVENTS_URL}?per_page=2", dict))

        assert ids_of(items) == [1, 2, 3]
        assert route.call_count == 2
        assert route.calls[1].request.url.params["page"] == "2"
        assert route.calls[1].request.url.params["per_page"] == "2"

    def test_default_page_size_is_added(self, http_client: HTTPClient, rsps: respx.MockRouter) -> None:
        route = rsps.get(EVENTS_URL).mock(side_effect=[page([1])])

        list(LazyPageIterable(http_client, f"{EVENTS_URL}?sort=asc", dict))

        assert route.calls[0].request.url.params["per_page"] == "100"
        assert route.calls[0].request.url.params["sort"] == "asc"

    def test_starts_at_requested_page(self, http_client: HTTPClient, rsps: respx.MockRouter) -> None:
        route = rsps.get(EVENTS_URL).mock(side_effect=[page([1, 2]), page([])])

        list(LazyPageIterable(http_client, f"{EVENTS_URL}?page=3&per_page=2", dict))

        assert [call.request.url.params["page"] for call in route.calls] == ["3", "4"]

    def test_items_are_parsed_into_item_type(self, http_client: HTTPClient, rsps: respx.MockRouter) -> None:
        rsps.get(EVENTS_URL).respond(json=[{"id": 1, "action_name": "pushed to", "author_username": "jdoe"}])

        items = list(LazyPageIterable(http_client, EVENTS_URL, Event))

        assert len(items) == 1
        assert isinstance(items[0], Event)
        assert items[0].action == "pushed to"


class TestNextPageSignals:
    def test_link_header_next_is_followed(self, http_client: HTTPClient, rsps: respx.MockRouter) -> None:
        next_url = f"{PROJECTS_URL}?cursor=abc&order_by=id&pagination=keyset&per_page=2"
        route = rsps.get(PROJECTS_URL).mock(
            side_effect=[page([9, 8], {"Link": f'<{next_url}>; rel="next"'}), page([7])]
        )

        items = list(LazyPageIterable(http_client, f"{PROJECTS_URL}?pagination=keyset&order_by=id&per_page=2", dict))

        assert ids_of(items) == [9, 8, 7]
        assert str(route.calls[1].request.url) == next_url

    def test_link_header_without_next_ends(self, http_client: HTTPClient, rsps: respx.MockRouter) -> None:
        first_url = f"{PROJECTS_URL}?pagination=keyset&order_by=id&per_page=2"
        route = rsps.get(PROJECTS_URL).mock(side_effect=[page([9, 8], {"Link": f'<{first_url}>; rel="first"'})])

        items = list(LazyPageIterable(http_client, first_url, dict))

        assert ids_of(items) == [9, 8]
        assert route.call_count == 1

    def test_empty_next_page_header_ends(self, http_client: HTTPClient, rsps: respx.MockRouter) -> None:
        route = rsps.get(EVENTS_URL).mock(side_effect=[page([1, 2], {"X-Next-Page": ""})])

        items = list(LazyPageIterable(http_client, f"{EVENTS_URL}?per_page=2", dict))

        assert ids_of(items) == [1, 2]
        assert route.call_count == 1

    def test_next_page_header_sets_page(self, http_client: HTTPClient, rsps: respx.MockRouter) -> None:
        route = rsps.get(EVENTS_URL).mock(side_effect=[page([1, 2], {"X-Next-Page": "5"}), page([])])

        list(LazyPageIterable(http_client, f"{EVENTS_URL}?per_page=2", dict))

        assert route.calls[1].request.url.params["page"] == "5"


class TestKeysetPagination:
    def test_descending_uses_id_before(self, http_client: HTTPClient, rsps: respx.MockRouter) -> None:
        route = rsps.get(PROJECTS_URL).mock(side_effect=[page([9, 8]), page([7])])

        items = list(LazyPageIterable(http_client, f"{PROJECTS_URL}?pagination=keyset&order_by=id&per_page=2", dict))

        assert ids_of(items) == [9, 8, 7]
        second = route.calls[1].request.url.params
        assert second["id_before"] == "8"
        assert second["pagination"] == "keyset"
        assert second["order_by"] == "id"
        assert "id_after" not in second

    def test_ascending_uses_id_after(self, http_client: HTTPClient, rsps: respx.MockRouter) -> None:
        route = rsps.get(PROJECTS_URL).mock(side_effect=[page([1, 2]), page([3, 4]), page([])])

        url = f"{PROJECTS_URL}?pagination=keyset&order_by=id&per_page=2&sort=asc"
        items = list(LazyPageIterable(http_client, url, dict))

        assert ids_of(items) == [1, 2, 3, 4]
        assert [call.request.url.params.get("id_after") for call in route.calls] == [None, "2", "4"]
        assert route.calls[2].request.url.params.get_list("id_after") == ["4"]

    def test_cursor_from_url(self) -> None:
        cursor = PageCursor.from_url(f"{PROJECTS_URL}?pagination=keyset&order_by=id&sort=asc", default_per_page=20)

        assert cursor == PageCursor(mode="keyset", per_page=20, page=1, ascending=True)

    def test_item_without_id_raises(self) -> None:
        cursor = PageCursor(mode="keyset", per_page=1)
        response = SuccessResponse(status_code=200, body="[{}]", content=b"[{}]")

        with pytest.raises(GitLabTransportError, match="requires every item to have an id"):
            cursor.advance(f"{PROJECTS_URL}?pagination=keyset", response, [{}])


class TestLazyPageIterable:
    def test_nothing_is_fetched_before_iteration(self, http_client: HTTPClient, rsps: respx.MockRouter) -> None:
        route = rsps.get(EVENTS_URL).mock(side_effect=[page([1])])

        LazyPageIterable(http_client, EVENTS_URL, dict)

        assert route.call_count == 0

    def test_break_after_first_item_single_fetch(self, http_client: HTTPClient, rsps: respx.MockRouter) -> None:
        route = rsps.get(EVENTS_URL).mock(side_effect=[page([1, 2], {"X-Next-Page": "2"}), page([3])])

        for item in LazyPageIterable(http_client, f"{EVENTS_URL}?per_page=2", dict):
            assert item["id"] == 1
            break

        assert route.call_count == 1

    def test_limit_stops_without_extra_fetch(self, http_client: HTTPClient, rsps: respx.MockRouter) -> None:
        route = rsps.get(EVENTS_URL).mock(side_effect=[page([1, 2], {"X-Next-Page": "2"}), page([3, 4])])

        items = list(LazyPageIterable(http_client, f"{EVENTS_URL}?per_page=2", dict, limit=3))

        assert ids_of(items) == [1, 2, 3]
        assert route.call_count == 2

    def test_each_iteration_starts_over(self, http_client: HTTPClient, rsps: respx.MockRouter) -> None:
        route = rsps.get(EVENTS_URL).mock(
            side_effect=[page([1, 2]), page([3]), page([1, 2]), page([3])],
        )
        iterable = LazyPageIterable(http_client, f"{EVENTS_URL}?per_page=2", dict)

        first = ids_of(list(iterable))
        second = ids_of(list(iterable))

        assert first == second == [1, 2, 3]
        assert route.call_count == 4
        assert "page" not in route.calls[2].request.url.params

    def test_error_surfaces_at_failing_fetch(self, http_client: HTTPClient, rsps: respx.MockRouter) -> None:
        rsps.get(EVENTS_URL).mock(
            side_effect=[page([1, 2]), httpx.Response(404, json={"message": "404 Not found"})],
        )
        consumed: list[int] = []

        with pytest.raises(GitLabNotFoundError) as exc_info:
            for item in LazyPageIterable(http_client, f"{EVENTS_URL}?per_page=2", dict):
                consumed.append(item["id"])

        assert consumed == [1, 2]
        assert exc_info.value.code == 404

    def test_cancel_before_next_fetch(self, http_client: HTTPClient, rsps: respx.MockRouter) -> None:
        route = rsps.get(EVENTS_URL).mock(side_effect=[page([1, 2]), page([3])])
        cancel = threading.Event()
        consumed: list[int] = []

        with pytest.raises(GitLabCancelledError):
            for item in LazyPageIterable(http_client, f"{EVENTS_URL}?per_page=2", dict, cancel=cancel):
                consumed.append(item["id"])
                cancel.set()

        assert consumed == [1, 2]
        assert route.call_count == 1

    def test_non_array_body_raises(self, http_client: HTTPClient, rsps: respx.MockRouter) -> None:
        rsps.get(EVENTS_URL).respond(json={"message": "not a list"})

        with pytest.raises(GitLabTransportError, match="Expected a JSON array"):
            list(LazyPageIterable(http_client, EVENTS_URL, dict))
