"""Tests for the transport layer."""

from __future__ import annotations

import json
import time
from collections.abc import Callable

import httpx
import pytest

from rexclient.auth import AccessToken
from rexclient.exceptions import APIError, AuthenticationError, DecodeError, TransportError
from rexclient.transport import HttpExecutor, decode_json, expect_status, json_request


def _executor(
    handler: Callable[[httpx.Request], httpx.Response],
    token: AccessToken | None = None,
) -> HttpExecutor:
    http = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpExecutor(http, token or AccessToken(access_token="tok-123"))


class TestHttpExecutor:
    """Tests for HttpExecutor."""

    def test_sets_auth_and_accept(self) -> None:
        """Every request carries the bearer token and accepts JSON."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        executor = _executor(handler)
        response = executor.execute(httpx.Request("GET", "https://rex.test/api/v2/users/current"))

        assert response.status_code == 200
        assert seen[0].headers["Authorization"] == "Bearer tok-123"
        assert seen[0].headers["Accept"] == "application/json"

    def test_keeps_custom_accept(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=b"data")

        executor = _executor(handler)
        executor.execute(httpx.Request("GET", "https://rex.test/f", headers={"Accept": "*/*"}))

        assert seen[0].headers["Accept"] == "application/json, */*"

    def test_without_token(self) -> None:
        """No request is sent without a token."""
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200)

        executor = HttpExecutor(httpx.Client(transport=httpx.MockTransport(handler)))
        with pytest.raises(AuthenticationError, match="login"):
            executor.execute(httpx.Request("GET", "https://rex.test/"))
        assert calls == []

    def test_expired_token(self) -> None:
        """An expired token is rejected locally."""
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200)

        token = AccessToken(access_token="tok-123", expires_at=time.time() - 5)
        executor = _executor(handler, token)
        with pytest.raises(AuthenticationError, match="expired"):
            executor.execute(httpx.Request("GET", "https://rex.test/"))
        assert calls == []

    def test_connection_error_is_wrapped(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        executor = _executor(handler)
        with pytest.raises(TransportError, match="connection refused") as exc_info:
            executor.execute(httpx.Request("GET", "https://rex.test/"))
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_non_2xx_is_returned(self) -> None:
        """Status handling is left to the caller."""
        executor = _executor(lambda request: httpx.Response(500, text="boom"))
        response = executor.execute(httpx.Request("GET", "https://rex.test/"))
        assert response.status_code == 500

    def test_stream(self) -> None:
        executor = _executor(lambda request: httpx.Response(200, content=b"x" * 10))
        response = executor.execute(httpx.Request("GET", "https://rex.test/"), stream=True)
        try:
            assert b"".join(response.iter_bytes()) == b"x" * 10
        finally:
            response.close()


class TestExpectStatus:
    """Tests for expect_status()."""

    def _response(self, status: int, body: str = "") -> httpx.Response:
        return httpx.Response(
            status, text=body, request=httpx.Request("GET", "https://rex.test/")
        )

    def test_expected_code(self) -> None:
        expect_status(self._response(201), 201)

    def test_any_success_without_codes(self) -> None:
        expect_status(self._response(204))

    def test_unexpected_code(self) -> None:
        with pytest.raises(APIError) as exc_info:
            expect_status(self._response(200), 201)
        assert exc_info.value.status_code == 200

    def test_error_carries_status_and_body(self) -> None:
        with pytest.raises(APIError, match="500") as exc_info:
            expect_status(self._response(500, "internal failure"), 201, message="Cannot create")
        error = exc_info.value
        assert error.status_code == 500
        assert error.body == "internal failure"
        assert "Cannot create" in str(error)
        assert "internal failure" in str(error)


class TestDecodeJson:
    """Tests for decode_json()."""

    def _response(self, content: bytes) -> httpx.Response:
        return httpx.Response(
            200, content=content, request=httpx.Request("GET", "https://rex.test/x")
        )

    def test_object(self) -> None:
        assert decode_json(self._response(b'{"a": 1}')) == {"a": 1}

    @pytest.mark.parametrize("content", [b"", b"not json", b"{"])
    def test_malformed(self, content: bytes) -> None:
        with pytest.raises(DecodeError, match="https://rex.test/x"):
            decode_json(self._response(content))

    def test_not_an_object(self) -> None:
        with pytest.raises(DecodeError, match="list"):
            decode_json(self._response(b"[1, 2]"))


class TestJsonRequest:
    """Tests for json_request()."""

    def test_with_payload(self) -> None:
        request = json_request("POST", "https://rex.test/x", {"name": "a"})
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {"name": "a"}

    def test_without_payload(self) -> None:
        request = json_request("GET", "https://rex.test/x")
        assert request.content == b""
