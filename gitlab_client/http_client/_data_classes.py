from typing import Any, Literal

import httpx
from pydantic import BaseModel, JsonValue, TypeAdapter, model_validator

from gitlab_client.exceptions import (
    GitLabAPIError,
    GitLabConflictError,
    GitLabNotFoundError,
    GitLabTransportError,
)
from gitlab_client.utils.useful_types import PrimitiveType


class HTTPResult(BaseModel):
    def get_success_or_raise(self) -> "SuccessResponse":
        """Return the success response, or raise the exception matching the failure."""
        if isinstance(self, SuccessResponse):
            return self
        elif isinstance(self, FailedResponse):
            message = f"Request failed with status code {self.status_code}: {self.error.message}"
            if self.status_code == 404:
                raise GitLabNotFoundError(message, code=self.status_code, error_details=self.error)
            if self.status_code == 409:
                raise GitLabConflictError(message, code=self.status_code, error_details=self.error)
            raise GitLabTransportError(message, code=self.status_code, error_details=self.error)
        elif isinstance(self, FailedRequest):
            raise GitLabTransportError(f"Request failed with error: {self.error}")
        else:
            raise GitLabAPIError(f"Unknown {type(self).__name__} type")


class FailedRequest(HTTPResult):
    error: str


class SuccessResponse(HTTPResult):
    status_code: int
    body: str
    content: bytes
    headers: dict[str, str] = {}
    links: dict[str, str] = {}

    @property
    def body_json(self) -> JsonValue:
        """Parse the response body as JSON. List endpoints return an array."""
        return _JSON_ADAPTER.validate_json(self.body)

    @property
    def next_link(self) -> str | None:
        """The URL of the rel="next" entry of the Link header, if any."""
        return self.links.get("next")

    @property
    def has_link_header(self) -> bool:
        return "link" in self.headers

    @property
    def next_page_header(self) -> str | None:
        """The raw X-Next-Page header. An empty string means this is the last page."""
        return self.headers.get("x-next-page")

    @classmethod
    def from_response(cls, response: httpx.Response) -> "SuccessResponse":
        return cls(
            status_code=response.status_code,
            body=response.text,
            content=response.content,
            headers={key.lower(): value for key, value in response.headers.items()},
            links={str(rel): link["url"] for rel, link in response.links.items() if "url" in link},
        )


class ErrorDetails(BaseModel):
    """The error body of a failed GitLab API call.

    GitLab reports errors as {"message": "..."}, {"error": "..."} or, for validation
    errors, {"message": {"field": ["problem", ...]}}.
    """

    code: int
    message: str

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ErrorDetails":
        """Populate the error details from a httpx response."""
        try:
            data = _JSON_ADAPTER.validate_json(response.text)
        except ValueError:
            return cls(code=response.status_code, message=response.text or response.reason_phrase)
        if not isinstance(data, dict):
            return cls(code=response.status_code, message=response.text)
        raw = data.get("message") or data.get("error") or data.get("error_description") or response.text
        return cls(code=response.status_code, message=_flatten_message(raw))


def _flatten_message(raw: JsonValue) -> str:
    if isinstance(raw, str):
        return raw
    if isinstance(raw, dict):
        parts = []
        for key, value in raw.items():
            problems = value if isinstance(value, list) else [value]
            parts.append(f"{key} {', '.join(str(problem) for problem in problems)}")
        return "; ".join(parts)
    if isinstance(raw, list):
        return "; ".join(str(item) for item in raw)
    return str(raw)


class FailedResponse(HTTPResult):
    status_code: int
    body: str
    error: ErrorDetails


class RequestMessage(BaseModel):
    endpoint_url: str
    method: Literal["GET", "POST", "PUT", "DELETE"]
    connect_attempt: int = 0
    read_attempt: int = 0
    status_attempt: int = 0
    content_type: str = "application/json"
    accept: str = "application/json"

    parameters: dict[str, PrimitiveType] | None = None
    data_content: bytes | None = None
    body_content: dict[str, JsonValue] | None = None

    @model_validator(mode="before")
    def check_data_or_body(cls, values: dict[str, Any]) -> dict[str, Any]:
        if values.get("data_content") is not None and values.get("body_content") is not None:
            raise ValueError("Only one of data_content or body_content can be set.")
        return values

    @property
    def total_attempts(self) -> int:
        return self.connect_attempt + self.read_attempt + self.status_attempt

    @property
    def content(self) -> bytes | None:
        if self.data_content is not None:
            return self.data_content
        elif self.body_content is not None:
            # We serialize using pydantic instead of json.dumps. This is because pydantic is faster
            # and handles more complex types such as datetime.
            return _BODY_SERIALIZER.dump_json(self.body_content)
        return None


_JSON_ADAPTER: TypeAdapter[JsonValue] = TypeAdapter(JsonValue)
_BODY_SERIALIZER = TypeAdapter(dict[str, JsonValue])
