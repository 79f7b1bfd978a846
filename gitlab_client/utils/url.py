"""Helpers to build GitLab API URLs from typed query values.

Every value goes through the same encoding, so a parameter always decodes back to
the string that was formatted from it. Absent values (None or blank strings) are
never written to the URL.
"""

from datetime import date, datetime
from enum import Enum
from urllib.parse import quote

from gitlab_client.config import MAX_PER_PAGE
from gitlab_client.exceptions import GitLabInvalidArgumentError
from gitlab_client.utils.useful_types import ParameterValue


def format_value(value: ParameterValue) -> str:
    """Format a value the way the GitLab API expects it, before percent-encoding.

    Examples:
        >>> format_value(True)
        'true'
        >>> format_value(AccessLevel.DEVELOPER)
        '30'
        >>> format_value(date(2024, 1, 31))
        '2024-01-31'
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return format_value(value.value)
    if isinstance(value, datetime | date):
        return value.isoformat()
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    raise GitLabInvalidArgumentError(f"Unsupported parameter value type {type(value).__name__}: {value!r}")


def encode_value(value: ParameterValue) -> str:
    return quote(format_value(value), safe="")


def add_parameter(url: str, name: str, value: ParameterValue) -> str:
    """Append name=value to the query of url.

    None and blank strings are skipped. Booleans are written as true/false, so an
    optional boolean set to False is sent explicitly.
    """
    if not name:
        raise GitLabInvalidArgumentError("Parameter name must be a non-empty string")
    if value is None:
        return url
    if isinstance(value, str) and not value.strip():
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{name}={encode_value(value)}"


def add_order_by(url: str, order_by: str | Enum | None = None, supports_keyset: bool = True) -> str:
    """Add ordering, selecting keyset pagination when the endpoint and query allow it.

    Keyset pagination is only available when ordering by id. Callers pass
    supports_keyset=False when the query has a free-text search, since search
    results are not stable under keyset paging.
    """
    order_by_value = format_value(order_by) if order_by is not None else None
    if supports_keyset and (not order_by_value or order_by_value == "id"):
        url = add_parameter(url, "pagination", "keyset")
        return add_parameter(url, "order_by", "id")
    return add_parameter(url, "order_by", order_by_value)


def encode_path_segment(value: str | int) -> str:
    """Percent-encode a single path segment, including any slash."""
    if isinstance(value, bool):
        raise GitLabInvalidArgumentError(f"Invalid path segment {value!r}")
    text = format_value(value)
    if not text.strip():
        raise GitLabInvalidArgumentError("Path segment must be a non-empty string")
    return quote(text, safe="")


def format_project_id(project_id: int | str) -> str:
    """A project is addressed by its numeric id or by its full path, e.g. group/subgroup/project."""
    if isinstance(project_id, bool):
        raise GitLabInvalidArgumentError(f"Invalid project id {project_id!r}")
    if isinstance(project_id, int):
        return str(check_positive_id(project_id, "project id"))
    if isinstance(project_id, str):
        if not project_id.strip():
            raise GitLabInvalidArgumentError("Project path must be a non-empty string")
        return quote(project_id, safe="")
    raise GitLabInvalidArgumentError(f"Project id must be an int or a str, got {type(project_id).__name__}")


def check_positive_id(value: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise GitLabInvalidArgumentError(f"{name} must be a positive integer, got {value!r}")
    return value


def check_page_size(per_page: int | None) -> int | None:
    if per_page is not None and not (0 < per_page <= MAX_PER_PAGE):
        raise GitLabInvalidArgumentError(f"per_page must be between 1 and {MAX_PER_PAGE}, got {per_page}")
    return per_page


def check_page(page: int | None) -> int | None:
    if page is not None and page < 1:
        raise GitLabInvalidArgumentError(f"page must be 1 or greater, got {page}")
    return page
