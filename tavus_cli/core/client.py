"""
Core HTTP client for the Tavus API.

Handles authentication, request building, and mapping responses onto the
error taxonomy. There are no retries: a failure is reported immediately.
"""

import http.client
import json
import urllib.error
import urllib.parse
import urllib.request
from typing import Any

from tavus_cli.core.config import Configuration
from tavus_cli.core.errors import (
    APIError,
    ArgumentError,
    AuthenticationError,
    BadRequestError,
    NotFoundError,
    RateLimitError,
    ServerError,
    ValidationError,
)
from tavus_cli.logging import get_logger

logger = get_logger(__name__)

HTTP_METHODS = ("GET", "POST", "PATCH", "DELETE")
BODY_METHODS = ("POST", "PATCH")


class _NoRedirectHandler(urllib.request.HTTPRedirectHandler):
    """Surface 3xx responses as HTTPError instead of following them."""

    def redirect_request(self, req, fp, code, msg, headers, newurl):
        return None


_opener = urllib.request.build_opener(_NoRedirectHandler)


# =============================================================================
# Response classification
# =============================================================================


def _parse_json(body: str | None) -> Any:
    """Parse a response body, returning None when it is empty or not JSON."""
    if not body:
        return None
    try:
        return json.loads(body)
    except json.JSONDecodeError:
        return None


def _error_message(parsed: Any, keys: tuple[str, ...], default: str) -> str:
    """Pick the first non-empty message field from an error body."""
    if isinstance(parsed, dict):
        for key in keys:
            value = parsed.get(key)
            # Handle both {"error": "message"} and {"error": {"message": "..."}}
            if isinstance(value, dict):
                value = value.get("message")
            if value:
                return str(value)
    return default


def classify_response(status: int, body: str | None) -> Any:
    """
    Map an HTTP status and raw body onto a result or an exception.

    Args:
        status: HTTP status code
        body: Raw response body text

    Returns:
        Parsed JSON for 200/201 ({} if the body is empty or not JSON),
        {"success": True} for 204

    Raises:
        APIError: One of its subclasses for documented statuses, APIError itself otherwise

    """
    if status in (200, 201):
        parsed = _parse_json(body)
        return {} if parsed is None else parsed

    if status == 204:
        return {"success": True}

    parsed = None
    error_class: type[APIError] = APIError

    if status == 400:
        parsed = _parse_json(body)
        error_class = BadRequestError
        message = _error_message(parsed, ("error", "message"), "Bad request")
    elif status == 401:
        parsed = _parse_json(body)
        error_class = AuthenticationError
        message = _error_message(parsed, ("message",), "Invalid access token")
    elif status == 404:
        error_class = NotFoundError
        message = "Resource not found"
    elif status == 422:
        parsed = _parse_json(body)
        error_class = ValidationError
        message = _error_message(parsed, ("error", "message"), "Validation failed")
    elif status == 429:
        error_class = RateLimitError
        message = "Rate limit exceeded"
    elif 500 <= status <= 599:
        error_class = ServerError
        message = f"Server error: {status}"
    else:
        message = f"Unexpected response: {status}"

    logger.debug("Response %s classified as %s", status, error_class.__name__)
    details = parsed if isinstance(parsed, dict) else None
    raise error_class(message, status=status, details=details, body=body)


# =============================================================================
# Request dispatch
# =============================================================================


def _encode_param(value: Any) -> Any:
    """Encode booleans the way the API expects them in query strings."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return [_encode_param(v) for v in value]
    return value


class APIClient:
    """
    Low-level HTTP client for the Tavus API.

    Handles:
    - Authentication via the x-api-key header
    - HTTP methods (GET, POST, PATCH, DELETE)
    - Error handling and response parsing

    Stateless per request; safe to share between threads.
    """

    def __init__(self, configuration: Configuration):
        self.configuration = configuration.validate()

    @property
    def base_url(self) -> str:
        return self.configuration.base_url

    @property
    def timeout(self) -> float:
        return self.configuration.timeout

    def _build_url(self, path: str, params: dict[str, Any] | None = None) -> str:
        """Build full URL from path and query parameters."""
        url = f"{self.base_url}{path}"
        if params:
            # Filter out None values and URL-encode
            filtered_params = {k: _encode_param(v) for k, v in params.items() if v is not None}
            if filtered_params:
                query_string = urllib.parse.urlencode(filtered_params, doseq=True)
                separator = "&" if "?" in url else "?"
                url = f"{url}{separator}{query_string}"
        return url

    def _build_headers(self) -> dict[str, str]:
        return {
            "x-api-key": self.configuration.api_key or "",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | list[Any] | None = None,
    ) -> Any:
        """
        Make an HTTP request to the API.

        Args:
            method: HTTP method (GET, POST, PATCH, DELETE)
            path: API path (e.g., /v2/personas/{id})
            params: Query parameters
            body: JSON body (mapping, or list for JSON Patch); only sent for POST/PATCH

        Returns:
            Classified response (see classify_response)

        Raises:
            ArgumentError: On an unsupported method
            APIError: On any transport failure or error response

        """
        method = method.upper()
        if method not in HTTP_METHODS:
            raise ArgumentError(f"Unsupported HTTP method: {method}")

        url = self._build_url(path, params)
        data = None
        if method in BODY_METHODS and body:
            data = json.dumps(body).encode("utf-8")

        logger.debug("%s %s", method, url)

        try:
            req = urllib.request.Request(url, data=data, headers=self._build_headers(), method=method)
            with _opener.open(req, timeout=self.timeout) as response:
                status = response.status
                raw_body = response.read()

        except urllib.error.HTTPError as e:
            status = e.code
            try:
                raw_body = e.read()
            except (OSError, http.client.HTTPException):
                raw_body = b""

        except urllib.error.URLError as e:
            raise APIError(f"Request failed: {e.reason}") from e

        except TimeoutError as e:
            raise APIError(f"Request failed: timed out after {self.timeout} seconds") from e

        except (OSError, http.client.HTTPException, ValueError) as e:
            raise APIError(f"Request failed: {e}") from e

        return classify_response(status, raw_body.decode("utf-8", errors="replace"))

    # =========================================================================
    # HTTP Methods
    # =========================================================================

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Make a GET request."""
        return self.request("GET", path, params=params)

    def post(self, path: str, body: dict | list | None = None, params: dict[str, Any] | None = None) -> Any:
        """Make a POST request."""
        return self.request("POST", path, params=params, body=body)

    def patch(self, path: str, body: dict | list | None = None, params: dict[str, Any] | None = None) -> Any:
        """Make a PATCH request."""
        return self.request("PATCH", path, params=params, body=body)

    def delete(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Make a DELETE request."""
        return self.request("DELETE", path, params=params)
