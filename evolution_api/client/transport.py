"""
HTTP transport for the Evolution API.

Owns the request pipeline shared by every resource operation:
- Header construction (JSON content negotiation plus the ``apikey`` credential)
- Path building with percent-encoded resource names
- Bounded retry of network-level failures
- Status code classification into the error taxonomy
- Tolerant parsing of successful response bodies
"""

import json
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal
from urllib.parse import quote

import httpx

from evolution_api.core.config.settings import EvolutionConfig
from evolution_api.core.errors import (
    ConnectionError,
    ProtocolError,
    ResponseEnvelope,
    TimeoutError,
    error_for_status,
)
from evolution_api.core.logging.logger import get_logger

HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]


def build_path(*segments: str) -> str:
    """Join path segments, percent-encoding each one.

    Resource names are caller-chosen, so spaces, slashes and other reserved
    characters are encoded as path segments (``" "`` becomes ``%20``).

    Example:
        build_path("instance", "connect", "my bot") -> "/instance/connect/my%20bot"
    """
    return "/" + "/".join(quote(str(segment), safe="") for segment in segments)


@dataclass(frozen=True)
class RequestDescriptor:
    """One outgoing request, built fresh per call."""

    method: HttpMethod
    path: str
    params: Mapping[str, Any] = field(default_factory=dict)
    body: Any = None

    @property
    def has_body(self) -> bool:
        return self.body is not None and self.body != {} and self.body != []


def parse_body(raw_body: str) -> Any:
    """Parse a successful body: ``None`` when empty, JSON when possible, raw text otherwise."""
    if not raw_body:
        return None
    try:
        return json.loads(raw_body)
    except ValueError:
        return raw_body


def parse_errors(raw_body: str) -> Any:
    """Extract the validation detail from a 400/422 body."""
    if not raw_body:
        return {}
    try:
        parsed = json.loads(raw_body)
    except ValueError:
        return {"body": raw_body}
    if isinstance(parsed, dict) and parsed.get("errors") is not None:
        return parsed["errors"]
    return parsed


class HttpTransport:
    """
    Synchronous request executor bound to one ``EvolutionConfig``.

    The ``httpx.Client`` can be injected (tests use ``httpx.MockTransport``);
    otherwise one is created and owned by the transport.
    """

    def __init__(
        self,
        config: EvolutionConfig,
        http_client: httpx.Client | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client()
        self._sleep = sleep
        self.logger = get_logger(__name__)

    def _get_headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.config.api_key:
            headers["apikey"] = self.config.api_key
        return headers

    def _url(self, path: str) -> str:
        return f"{self.config.base_url}{path}"

    def execute(
        self,
        method: HttpMethod,
        path: str,
        params: Mapping[str, Any] | None = None,
        body: Any = None,
    ) -> Any:
        """Issue one API call and return the parsed result.

        Args:
            method: HTTP method
            path: Path below ``base_url``, already built with ``build_path``
            params: Optional query parameters
            body: Optional JSON body, sent only when non-empty

        Returns:
            Parsed JSON, the raw text for non-JSON bodies, or None for empty bodies

        Raises:
            EvolutionAPIError: The subclass matching the failure
        """
        request = RequestDescriptor(method, path, dict(params or {}), body)
        response = self._send_with_retry(request)
        return self._handle_response(request, response)

    def get(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return self.execute("GET", path, params=params)

    def post(self, path: str, body: Any = None) -> Any:
        return self.execute("POST", path, body=body)

    def put(self, path: str, body: Any = None) -> Any:
        return self.execute("PUT", path, body=body)

    def delete(self, path: str) -> Any:
        return self.execute("DELETE", path)

    def _send_with_retry(self, request: RequestDescriptor) -> httpx.Response:
        url = self._url(request.path)
        max_attempts = self.config.retry_attempts + 1
        last_error: httpx.TransportError | None = None

        for attempt in range(1, max_attempts + 1):
            self.logger.debug(
                f"{request.method} {request.path} (attempt {attempt}/{max_attempts})"
            )
            try:
                return self._http.request(
                    request.method,
                    url,
                    params=request.params or None,
                    json=request.body if request.has_body else None,
                    headers=self._get_headers(),
                    timeout=self.config.timeout,
                )
            except httpx.TimeoutException as exc:
                # Timeouts are reported at once; the deadline applies per attempt
                self.logger.error(f"Timeout on {request.method} {request.path}: {exc}")
                raise TimeoutError(
                    f"Request to {request.path} timed out after {self.config.timeout}s"
                ) from exc
            except httpx.TransportError as exc:
                last_error = exc
                if attempt < max_attempts:
                    self.logger.warning(
                        f"Connection error on {request.method} {request.path}, "
                        f"retrying in {self.config.retry_delay}s: {exc}"
                    )
                    self._sleep(self.config.retry_delay)
            except httpx.RequestError as exc:
                self.logger.error(f"Protocol error on {request.method} {request.path}: {exc}")
                raise ProtocolError(
                    f"Request to {request.path} failed: {exc}"
                ) from exc

        self.logger.error(
            f"Connection error on {request.method} {request.path} "
            f"after {max_attempts} attempts: {last_error}"
        )
        raise ConnectionError(
            f"Connection failed after {max_attempts} attempts: {last_error}",
            attempts=max_attempts,
        ) from last_error

    def _handle_response(self, request: RequestDescriptor, response: httpx.Response) -> Any:
        raw_body = response.text
        status = response.status_code

        if 200 <= status < 300:
            self.logger.debug(f"{request.method} {request.path} -> {status}")
            return parse_body(raw_body)

        envelope = ResponseEnvelope(status_code=status, raw_body=raw_body)
        errors = parse_errors(raw_body) if status in (400, 422) else None
        error = error_for_status(status, envelope, errors)

        self.logger.error(
            f"{request.method} {request.path} failed with {status}: {raw_body[:200]}"
        )
        raise error

    def close(self) -> None:
        """Close the underlying HTTP client if this transport created it."""
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
