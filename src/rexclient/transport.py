"""Transport layer for authenticated REX API calls.

Defines the Executor capability and its implementation:
- Executor: accepts a prepared httpx.Request and returns the response
- HttpExecutor: production executor that adds the bearer token and sends
  the request through an httpx.Client

Resource clients only ever see an Executor, so tests can substitute a
recording double without touching HTTP at all.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import httpx

from rexclient.exceptions import APIError, AuthenticationError, DecodeError, TransportError

if TYPE_CHECKING:
    from rexclient.auth import AccessToken

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"


class Executor(ABC):
    """Performs one REX request.

    Implementations must attach the caller's credentials and an
    ``Accept: application/json`` header. A response obtained with
    ``stream=True`` is not read; the caller must close it on every path.
    """

    @abstractmethod
    def execute(self, request: httpx.Request, *, stream: bool = False) -> httpx.Response:
        """Send a request and return the response.

        Args:
            request: The prepared request.
            stream: Leave the body unread so it can be consumed incrementally.

        Returns:
            The HTTP response, whatever its status code.

        Raises:
            TransportError: The request could not be sent or answered.
            AuthenticationError: No credentials are available.
        """
        ...


class HttpExecutor(Executor):
    """Executor backed by an httpx.Client and a bearer token."""

    def __init__(self, http_client: httpx.Client, token: AccessToken | None = None) -> None:
        self._http = http_client
        self.token = token

    def execute(self, request: httpx.Request, *, stream: bool = False) -> httpx.Response:
        if self.token is None or not self.token.access_token:
            raise AuthenticationError("Not authenticated. Call login() first.")
        if not self.token.is_valid(buffer_seconds=0):
            raise AuthenticationError("Access token has expired. Call login() again.")

        request.headers["Authorization"] = self.token.authorization
        request.headers["Accept"] = _with_json_accept(request.headers.get("Accept"))

        try:
            response = self._http.send(request, stream=stream)
        except httpx.TransportError as e:
            raise TransportError(f"{request.method} {request.url} failed: {e}") from e

        logger.debug("%s %s -> %d", request.method, request.url, response.status_code)
        return response


def _with_json_accept(accept: str | None) -> str:
    if not accept:
        return JSON_MEDIA_TYPE
    if JSON_MEDIA_TYPE in accept:
        return accept
    return f"{JSON_MEDIA_TYPE}, {accept}"


# --- Response helpers ---


def expect_status(response: httpx.Response, *codes: int, message: str | None = None) -> None:
    """Raise APIError unless the response status is one of ``codes``.

    With no codes given, any 2xx status is accepted. The body of a streamed
    response is read before raising so the error carries it.
    """
    ok = response.status_code in codes if codes else response.is_success
    if ok:
        return
    response.read()
    raise APIError(response.status_code, response.text.strip(), message)


def decode_json(response: httpx.Response) -> dict[str, Any]:
    """Decode a JSON object body, raising DecodeError on anything else."""
    url = _request_url(response)
    try:
        data = response.json()
    except ValueError as e:
        raise DecodeError(url, str(e)) from e
    if not isinstance(data, dict):
        raise DecodeError(url, f"expected a JSON object, got {type(data).__name__}")
    return data


def json_request(
    method: str,
    url: str,
    payload: dict[str, Any] | None = None,
    **kwargs: Any,
) -> httpx.Request:
    """Build a request with an optional JSON body."""
    if payload is None:
        return httpx.Request(method, url, **kwargs)
    return httpx.Request(method, url, json=payload, **kwargs)


def _request_url(response: httpx.Response) -> str:
    # httpx raises RuntimeError when a response was built without a request
    try:
        return str(response.request.url)
    except RuntimeError:
        return ""
