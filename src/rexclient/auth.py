"""OAuth2 client-credentials token handling.

The REX token endpoint authenticates the application itself: the client ID
and secret are sent as a Basic authorization header and exchanged for a
short-lived bearer token. There is no refresh token; callers simply
authenticate again once the token has expired.
"""

from __future__ import annotations

import base64
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from rexclient.exceptions import AuthenticationError, DecodeError, TransportError

if TYPE_CHECKING:
    from rexclient.config import Settings

logger = logging.getLogger(__name__)

TOKEN_PATH = "/oauth/token"


@dataclass
class AccessToken:
    """Bearer token returned by the token endpoint.

    Attributes:
        access_token: The token sent with every API call.
        token_type: Token type reported by the server, normally "bearer".
        expires_at: Unix timestamp when the token expires (0 if unknown).
        scope: Space separated scopes granted to the token.
    """

    access_token: str
    token_type: str = "bearer"
    expires_at: float = 0.0
    scope: str = ""

    def is_valid(self, buffer_seconds: int = 60) -> bool:
        """Check if token is still valid with a safety buffer."""
        if not self.access_token:
            return False
        if not self.expires_at:
            return True
        return time.time() < self.expires_at - buffer_seconds

    def expires_in_seconds(self) -> int:
        """Return seconds until token expires."""
        return max(0, int(self.expires_at - time.time()))

    @property
    def authorization(self) -> str:
        return f"Bearer {self.access_token}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "access_token": self.access_token,
            "token_type": self.token_type,
            "expires_at": self.expires_at,
            "scope": self.scope,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AccessToken:
        return cls(
            access_token=data["access_token"],
            token_type=data.get("token_type", "bearer"),
            expires_at=float(data.get("expires_at", 0.0)),
            scope=data.get("scope", ""),
        )

    @classmethod
    def from_response(cls, data: dict[str, Any], now: float | None = None) -> AccessToken:
        """Create a token from the token endpoint's JSON body.

        The endpoint reports a relative ``expires_in``; it is converted to an
        absolute timestamp at receipt.
        """
        token = data.get("access_token")
        if not isinstance(token, str) or not token:
            raise AuthenticationError("Token response did not contain an access_token")

        expires_at = 0.0
        expires_in = data.get("expires_in")
        if isinstance(expires_in, int | float) and expires_in > 0:
            expires_at = (now if now is not None else time.time()) + float(expires_in)

        return cls(
            access_token=token,
            token_type=data.get("token_type") or "bearer",
            expires_at=expires_at,
            scope=data.get("scope") or "",
        )


def basic_credentials(client_id: str, client_secret: str) -> str:
    """Build the Basic authorization header value for a client ID/secret pair."""
    raw = f"{client_id}:{client_secret}".encode()
    return "Basic " + base64.b64encode(raw).decode("ascii")


class TokenProvider:
    """Exchanges client credentials for an access token.

    The provider does not keep the token; the caller decides where to store it.
    """

    def __init__(self, settings: Settings, http_client: httpx.Client) -> None:
        self._settings = settings
        self._http = http_client

    @property
    def token_url(self) -> str:
        return self._settings.url(TOKEN_PATH)

    def authenticate(self, client_id: str, client_secret: str) -> AccessToken:
        """Run the client-credentials grant.

        Args:
            client_id: The API client ID.
            client_secret: The API client secret.

        Returns:
            A fresh AccessToken.

        Raises:
            AuthenticationError: Credentials missing or rejected (non-200).
            TransportError: The token endpoint could not be reached.
            DecodeError: The token endpoint returned malformed JSON.
        """
        if not client_id or not client_secret:
            raise AuthenticationError("Client ID and client secret are required")

        headers = {
            "Authorization": basic_credentials(client_id, client_secret),
            "Content-Type": "application/x-www-form-urlencoded; charset=ISO-8859-1",
            "Accept": "application/json",
        }
        logger.debug("Requesting access token from %s", self.token_url)
        try:
            response = self._http.post(
                self.token_url,
                content=b"grant_type=client_credentials",
                headers=headers,
            )
        except httpx.TransportError as e:
            raise TransportError(f"Cannot reach token endpoint {self.token_url}: {e}") from e

        if response.status_code != 200:
            raise AuthenticationError(
                f"Token request rejected with status {response.status_code}: {response.text}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise DecodeError(self.token_url, str(e)) from e
        if not isinstance(data, dict):
            raise DecodeError(self.token_url, "expected a JSON object")

        token = AccessToken.from_response(data)
        logger.debug("Access token received, expires in %ss", token.expires_in_seconds())
        return token
