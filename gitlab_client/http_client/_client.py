import logging
import random
import sys
import threading
import time
from collections.abc import MutableMapping, Set
from typing import Literal

import httpx
from rich.console import Console

from gitlab_client._warnings import HighSeverityWarning
from gitlab_client.config import GitLabClientConfig
from gitlab_client.exceptions import GitLabCancelledError
from gitlab_client.http_client._data_classes import (
    ErrorDetails,
    FailedRequest,
    FailedResponse,
    HTTPResult,
    RequestMessage,
    SuccessResponse,
)
from gitlab_client.utils.auxiliary import get_user_agent

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

logger = logging.getLogger(__name__)

_MAX_BACKOFF_SECONDS = 30.0
_IDEMPOTENT_METHODS = frozenset({"GET", "DELETE"})
# The server did not process the request, so any method can be sent again.
_UNPROCESSED_STATUS_CODES = frozenset({429, 503})


class HTTPClient:
    """An HTTP client for the GitLab REST API.

    This class handles authentication headers, retries, and error handling for HTTP requests.

    Args:
        config (GitLabClientConfig): Configuration for the GitLab client.
        max_retries (int | None): The maximum number of retries for a request. Defaults to
            the max_retries of the config.
        pool_connections (int): The number of keep-alive connections to cache. Default is 10.
        pool_maxsize (int): The maximum number of connections. Default is 20.
        retry_status_codes (frozenset[int]): HTTP status codes that should trigger a retry.
            Default is {408, 429, 502, 503, 504}. POST and PUT requests are only retried on 429 and 503,
            and on connect errors.
        console (Console | None): Optional Rich Console for printing warnings.

    """

    def __init__(
        self,
        config: GitLabClientConfig,
        max_retries: int | None = None,
        pool_connections: int = 10,
        pool_maxsize: int = 20,
        retry_status_codes: Set[int] = frozenset({408, 429, 502, 503, 504}),
        console: Console | None = None,
    ):
        self.config = config
        self._max_retries = config.max_retries if max_retries is None else max_retries
        self._pool_connections = pool_connections
        self._pool_maxsize = pool_maxsize
        self._retry_status_codes = retry_status_codes
        self._console = console

        self.session = self._create_session()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc_value: BaseException | None, traceback: object | None
    ) -> Literal[False]:
        """Close the session when exiting the context."""
        self.close()
        return False  # Do not suppress exceptions

    def close(self) -> None:
        self.session.close()

    def _create_session(self) -> httpx.Client:
        return httpx.Client(
            limits=httpx.Limits(
                max_connections=self._pool_maxsize,
                max_keepalive_connections=self._pool_connections,
            ),
            timeout=self.config.timeout,
        )

    def _create_headers(self, message: RequestMessage) -> MutableMapping[str, str]:
        headers: MutableMapping[str, str] = {}
        headers["User-Agent"] = f"httpx/{httpx.__version__} {get_user_agent(self.config.client_name)}"
        if auth := self.config.authorization_header():
            auth_name, auth_value = auth
            headers[auth_name] = auth_value
        if message.content is not None:
            headers["Content-Type"] = message.content_type
        headers["Accept"] = message.accept
        headers.update(self.config.headers)
        return headers

    @staticmethod
    def _get_retry_after_in_header(response: httpx.Response) -> float | None:
        if "Retry-After" not in response.headers:
            return None
        try:
            return float(response.headers["Retry-After"])
        except ValueError:
            # Ignore invalid Retry-After header
            return None

    @staticmethod
    def _backoff_time(attempts: int) -> float:
        backoff_time = 0.5 * (2**attempts)
        return min(backoff_time, _MAX_BACKOFF_SECONDS) * random.uniform(0, 1.0)

    def request_single(self, message: RequestMessage) -> RequestMessage | HTTPResult:
        """Send an HTTP request and return the response.

        Args:
            message (RequestMessage): The request message to send.
        Returns:
            RequestMessage | HTTPResult: The response, or the same message if it should be retried.
        """
        try:
            response = self._make_request(message)
            result = self._handle_response_single(response, message)
        except httpx.HTTPError as e:
            result = self._handle_error_single(e, message)
        return result

    def request_single_retries(self, message: RequestMessage, cancel: threading.Event | None = None) -> HTTPResult:
        """Send an HTTP request and handle retries.

        This method will keep retrying the request until it either succeeds or
        exhausts the maximum number of retries.

        Note this method will use the current thread to process all request, thus
        it is blocking.

        Args:
            message (RequestMessage): The request message to send.
            cancel (threading.Event | None): When set before an attempt, the request is abandoned
                with GitLabCancelledError.
        Returns:
            HTTPResult: The final response message, which can be either successful response or failed request.
        """
        if message.total_attempts > 0:
            raise RuntimeError(f"RequestMessage has already been attempted {message.total_attempts} times.")
        current_request = message
        while True:
            if cancel is not None and cancel.is_set():
                raise GitLabCancelledError(f"Request to {message.endpoint_url} was cancelled")
            result = self.request_single(current_request)
            if isinstance(result, RequestMessage):
                current_request = result
            elif isinstance(result, HTTPResult):
                return result
            else:
                raise TypeError(f"Unexpected result type: {type(result)}")

    def _make_request(self, message: RequestMessage) -> httpx.Response:
        logger.debug("%s %s", message.method, message.endpoint_url)
        return self.session.request(
            method=message.method,
            url=message.endpoint_url,
            content=message.content,
            headers=self._create_headers(message),
            params=message.parameters,
            timeout=self.config.timeout,
            follow_redirects=False,
        )

    def _handle_response_single(self, response: httpx.Response, request: RequestMessage) -> RequestMessage | HTTPResult:
        if 200 <= response.status_code < 300:
            return SuccessResponse.from_response(response)
        if retry_request := self._retry_request(response, request):
            return retry_request
        else:
            # Permanent failure
            return FailedResponse(
                status_code=response.status_code,
                body=response.text,
                error=ErrorDetails.from_response(response),
            )

    def _retry_request(self, response: httpx.Response, request: RequestMessage) -> RequestMessage | None:
        retry_after = self._get_retry_after_in_header(response)
        if retry_after is not None and response.status_code == 429 and request.status_attempt < self._max_retries:
            if self._console is not None:
                short_url = request.endpoint_url.removeprefix(self.config.base_api_url)
                HighSeverityWarning(
                    f"Rate limit exceeded for the {short_url!r} endpoint. Retrying after {retry_after} seconds."
                ).print_warning(console=self._console)
            logger.info("Rate limited on %s, retrying after %s seconds", request.endpoint_url, retry_after)
            request.status_attempt += 1
            time.sleep(retry_after)
            return request

        if (
            request.status_attempt < self._max_retries
            and response.status_code in self._retry_status_codes
            and (request.method in _IDEMPOTENT_METHODS or response.status_code in _UNPROCESSED_STATUS_CODES)
        ):
            request.status_attempt += 1
            logger.info(
                "Retrying %s %s after status %d (attempt %d)",
                request.method,
                request.endpoint_url,
                response.status_code,
                request.status_attempt,
            )
            time.sleep(self._backoff_time(request.total_attempts))
            return request
        return None

    def _handle_error_single(self, e: httpx.HTTPError, request: RequestMessage) -> RequestMessage | HTTPResult:
        if isinstance(e, httpx.ReadTimeout | httpx.ReadError):
            error_type = "read"
            request.read_attempt += 1
            attempts = request.read_attempt
            if request.method not in _IDEMPOTENT_METHODS:
                return FailedRequest(error=f"{request.method} request failed with read error: {e!s}")
        elif isinstance(e, httpx.ConnectError | httpx.ConnectTimeout):
            error_type = "connect"
            request.connect_attempt += 1
            attempts = request.connect_attempt
        else:
            return FailedRequest(error=f"Unexpected exception: {e!s}")

        if attempts <= self._max_retries:
            logger.info("Retrying %s after %s error: %s", request.endpoint_url, error_type, e)
            time.sleep(self._backoff_time(request.total_attempts))
            return request
        else:
            # We have already incremented the attempt count, so we subtract 1 here
            error_msg = f"RequestException after {request.total_attempts - 1} attempts ({error_type} error): {e!s}"
            return FailedRequest(error=error_msg)
