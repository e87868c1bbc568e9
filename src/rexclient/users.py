"""User lookups."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from rexclient.exceptions import DecodeError, NotFoundError
from rexclient.models import User
from rexclient.transport import decode_json, expect_status

if TYPE_CHECKING:
    from rexclient.config import Settings
    from rexclient.transport import Executor

logger = logging.getLogger(__name__)

CURRENT_USER_PATH = "/api/v2/users/current"
USERS_PATH = "/api/v2/users"
FIND_BY_EMAIL_PATH = "/api/v2/users/search/findUserIdByEmail"
FIND_BY_ID_PATH = "/api/v2/users/search/findByUserId"


class UserClient:
    """Reads user records."""

    def __init__(self, executor: Executor, settings: Settings) -> None:
        self._executor = executor
        self._settings = settings

    def get_current_user(self) -> User:
        """Fetch the user the access token belongs to."""
        response = self._executor.execute(
            httpx.Request("GET", self._settings.url(CURRENT_USER_PATH))
        )
        expect_status(response, 200)
        return User.from_dict(decode_json(response))

    def get_user_by_email(self, email: str) -> User:
        """Look up a user by email address.

        REX only resolves an email to a user ID; the full record is fetched
        with a second call.

        Raises:
            NotFoundError: No user is registered with that email.
        """
        response = self._executor.execute(
            httpx.Request(
                "GET",
                self._settings.url(FIND_BY_EMAIL_PATH),
                params={"email": email},
            )
        )
        if response.status_code == 404 or (response.is_success and not response.content.strip()):
            raise NotFoundError(f"User not found: {email}")
        expect_status(response, 200)

        # A null or non-object body carries no user ID either
        try:
            data = response.json()
        except ValueError as e:
            raise DecodeError(str(response.request.url), str(e)) from e
        user_id = data.get("userId") if isinstance(data, dict) else None
        if not user_id:
            raise NotFoundError(f"User not found: {email}")

        logger.debug("Resolved %s to user %s", email, user_id)
        return self.get_user_by_id(str(user_id))

    def get_user_by_id(self, user_id: str) -> User:
        response = self._executor.execute(
            httpx.Request(
                "GET",
                self._settings.url(FIND_BY_ID_PATH),
                params={"userId": user_id},
            )
        )
        if response.status_code == 404:
            raise NotFoundError(f"User not found: {user_id}")
        expect_status(response, 200)
        return User.from_dict(decode_json(response))

    def get_user_count(self) -> int:
        """Return the number of registered users.

        Only ``page.totalElements`` of the list response is read. Requires
        admin permissions; other callers get an APIError.
        """
        response = self._executor.execute(httpx.Request("GET", self._settings.url(USERS_PATH)))
        expect_status(response, 200)
        page = decode_json(response).get("page") or {}
        return int(page.get("totalElements") or 0)
