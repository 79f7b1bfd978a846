from datetime import date, datetime, timezone
from urllib.parse import parse_qsl, urlsplit

import pytest

from gitlab_client.exceptions import GitLabInvalidArgumentError
from gitlab_client.resource_classes import AccessLevel, VisibilityLevel
from gitlab_client.utils.url import (
    add_order_by,
    add_parameter,
    check_page,
    check_page_size,
    encode_path_segment,
    format_project_id,
    format_value,
)


class TestFormatValue:
    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(True, "true", id="true"),
            pytest.param(False, "false", id="false"),
            pytest.param(42, "42", id="int"),
            pytest.param("abc", "abc", id="str"),
            pytest.param(AccessLevel.DEVELOPER, "30", id="int enum"),
            pytest.param(VisibilityLevel.PRIVATE, "private", id="str enum"),
            pytest.param(date(2024, 1, 31), "2024-01-31", id="date"),
            pytest.param(
                datetime(2024, 1, 31, 12, 30, tzinfo=timezone.utc), "2024-01-31T12:30:00+00:00", id="datetime"
            ),
        ],
    )
    def test_format_value(self, value: object, expected: str) -> None:
        assert format_value(value) == expected  # type: ignore[arg-type]

    def test_unsupported_type(self) -> None:
        with pytest.raises(GitLabInvalidArgumentError, match="Unsupported parameter value type"):
            format_value(1.5)  # type: ignore[arg-type]


class TestAddParameter:
    def test_first_and_second_parameter(self) -> None:
        url = add_parameter("/projects", "owned", True)
        url = add_parameter(url, "search", "abc")

        assert url == "/projects?owned=true&search=abc"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_absent_values_are_skipped(self, value: str | None) -> None:
        assert add_parameter("/projects", "search", value) == "/projects"

    def test_false_is_sent(self) -> None:
        assert add_parameter("/projects", "archived", False) == "/projects?archived=false"

    def test_empty_name_raises(self) -> None:
        with pytest.raises(GitLabInvalidArgumentError):
            add_parameter("/projects", "", "value")

    @pytest.mark.parametrize(
        "value",
        [
            "my project",
            "a&b=c",
            "ümlaut/ß",
            "100%",
            "#hash?query",
        ],
    )
    def test_value_round_trips(self, value: str) -> None:
        url = add_parameter("/projects", "search", value)

        assert parse_qsl(urlsplit(url).query) == [("search", value)]


class TestAddOrderBy:
    @pytest.mark.parametrize("order_by", [None, "", "id"])
    def test_keyset_when_ordering_by_id(self, order_by: str | None) -> None:
        assert add_order_by("/projects", order_by) == "/projects?pagination=keyset&order_by=id"

    def test_offset_when_ordering_by_other_field(self) -> None:
        assert add_order_by("/projects", "name") == "/projects?order_by=name"

    def test_no_keyset_without_support(self) -> None:
        assert add_order_by("/projects?search=abc", "id", supports_keyset=False) == "/projects?search=abc&order_by=id"

    def test_no_keyset_and_no_order(self) -> None:
        assert add_order_by("/projects", None, supports_keyset=False) == "/projects"


class TestIdentifiers:
    def test_path_segment_encodes_slash(self) -> None:
        assert encode_path_segment("a/b c") == "a%2Fb%20c"

    @pytest.mark.parametrize("value", ["", "  ", True])
    def test_invalid_path_segment(self, value: str) -> None:
        with pytest.raises(GitLabInvalidArgumentError):
            encode_path_segment(value)

    @pytest.mark.parametrize(
        "project_id, expected",
        [
            pytest.param(42, "42", id="numeric id"),
            pytest.param("group/sub/project", "group%2Fsub%2Fproject", id="full path"),
        ],
    )
    def test_format_project_id(self, project_id: int | str, expected: str) -> None:
        assert format_project_id(project_id) == expected

    @pytest.mark.parametrize("project_id", [0, -1, "", " ", False, 1.0])
    def test_invalid_project_id(self, project_id: object) -> None:
        with pytest.raises(GitLabInvalidArgumentError):
            format_project_id(project_id)  # type: ignore[arg-type]

    def test_invalid_argument_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            format_project_id(0)


class TestPaging:
    @pytest.mark.parametrize("per_page", [1, 50, 100, None])
    def test_valid_page_size(self, per_page: int | None) -> None:
        assert check_page_size(per_page) == per_page

    @pytest.mark.parametrize("per_page", [0, -5, 101])
    def test_invalid_page_size(self, per_page: int) -> None:
        with pytest.raises(GitLabInvalidArgumentError, match="per_page must be between 1 and 100"):
            check_page_size(per_page)

    def test_invalid_page(self) -> None:
        with pytest.raises(GitLabInvalidArgumentError, match="page must be 1 or greater"):
            check_page(0)
