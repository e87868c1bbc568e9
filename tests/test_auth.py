"""Tests for the OAuth2 token provider."""

from __future__ import annotations

import base64
import time
from collections.abc import Callable

import httpx
import pytest

from rexclient.auth import AccessToken, TokenProvider, basic_credentials
from rexclient.config import Settings
from rexclient.exceptions import AuthenticationError, DecodeError, TransportError


def _provider(
    settings: Settings,
    handler: Callable[[httpx.Request], httpx.Response],
) -> TokenProvider:
    return TokenProvider(settings, httpx.Client(transport=httpx.MockTransport(handler)))


class TestAccessToken:
    """Tests for AccessToken."""

    def test_is_valid_with_valid_token(self) -> None:
        token = AccessToken(access_token="t", expires_at=time.time() + 3600)
        assert token.is_valid() is True

    def test_is_valid_with_expired_token(self) -> None:
        token = AccessToken(access_token="t", expires_at=time.time() - 100)
        assert token.is_valid() is False

    def test_is_valid_respects_buffer(self) -> None:
        token = AccessToken(access_token="t", expires_at=time.time() + 30)
        assert token.is_valid(buffer_seconds=60) is False
        assert token.is_valid(buffer_seconds=10) is True

    def test_unknown_expiry_is_valid(self) -> None:
        assert AccessToken(access_token="t").is_valid() is True

    def test_empty_token_is_invalid(self) -> None:
        assert AccessToken(access_token="").is_valid() is False

    def test_expires_in_seconds_with_expired_token(self) -> None:
        token = AccessToken(access_token="t", expires_at=time.time() - 100)
        assert token.expires_in_seconds() == 0

    def test_from_response(self) -> None:
        token = AccessToken.from_response(
            {"access_token": "abc", "token_type": "bearer", "expires_in": 3600, "scope": "read"},
            now=1000.0,
        )
        assert token.access_token == "abc"
        assert token.expires_at == 4600.0
        assert token.scope == "read"
        assert token.authorization == "Bearer abc"

    def test_from_response_without_token(self) -> None:
        with pytest.raises(AuthenticationError, match="access_token"):
            AccessToken.from_response({"token_type": "bearer"})

    def test_roundtrip(self) -> None:
        original = AccessToken(access_token="abc", expires_at=1234567890.0, scope="read")
        assert AccessToken.from_dict(original.to_dict()) == original


class TestTokenProvider:
    """Tests for TokenProvider.authenticate()."""

    def test_basic_credentials(self) -> None:
        value = basic_credentials("client", "secret")
        assert value == "Basic " + base64.b64encode(b"client:secret").decode()

    def test_success(self, settings: Settings) -> None:
        """Valid credentials yield a non-empty bearer token."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={"access_token": "tok-1", "token_type": "bearer", "expires_in": 43199},
            )

        token = _provider(settings, handler).authenticate("client", "secret")

        assert token.access_token == "tok-1"
        assert token.is_valid()
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == "https://rex.test/oauth/token"
        assert request.content == b"grant_type=client_credentials"
        assert request.headers["Authorization"] == basic_credentials("client", "secret")
        assert request.headers["Accept"] == "application/json"
        assert request.headers["Content-Type"].startswith("application/x-www-form-urlencoded")

    @pytest.mark.parametrize("status", [400, 401, 500])
    def test_rejected(self, settings: Settings, status: int) -> None:
        provider = _provider(settings, lambda request: httpx.Response(status, text="bad client"))
        with pytest.raises(AuthenticationError, match=str(status)):
            provider.authenticate("client", "wrong")

    def test_missing_credentials(self, settings: Settings) -> None:
        """No request is made without a client ID and secret."""
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200)

        with pytest.raises(AuthenticationError):
            _provider(settings, handler).authenticate("", "secret")
        assert calls == []

    def test_malformed_body(self, settings: Settings) -> None:
        provider = _provider(settings, lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(DecodeError):
            provider.authenticate("client", "secret")

    def test_unreachable(self, settings: Settings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("no route to host", request=request)

        with pytest.raises(TransportError, match="token endpoint"):
            _provider(settings, handler).authenticate("client", "secret")
