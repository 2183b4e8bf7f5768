from __future__ import annotations

import logging
import threading
from typing import Any, Mapping, Optional

import requests

from ..config import AppConfig, get_config
from ..errors import AuthenticationError, DecodeError, TransportError
from .auth import Authenticator, SessionFactory

logger = logging.getLogger(__name__)

MISSING_TOKEN_MESSAGE = (
    "Token was not set after logging in, but no error was returned. "
    "Report bug at https://github.com/Zower/snew"
)


class AuthenticatedClient:
    """
    Authenticated access to the Reddit API, shared by every feed and
    handle created from the same `Reddit` instance.

    Responsibilities:
    - Hold one requests.Session whose default headers carry the bearer
      token and the caller's User-Agent.
    - Detect a rejected token (401/403) on any GET, log in again once,
      rebuild the session and retry the same request once.

    The session and the authenticator each sit behind their own lock.
    A thread recovering from a rejected token keeps the session lock for
    the whole retry, so no other caller sees a half-rebuilt session.
    """

    def __init__(
        self,
        authenticator: Authenticator,
        user_agent: str,
        config: Optional[AppConfig] = None,
        session_factory: SessionFactory = requests.Session,
    ) -> None:
        self._cfg = config or get_config()
        self._user_agent = user_agent
        self._session_factory = session_factory

        authenticator.login()
        access_token = self._current_access_token(authenticator)

        self._authenticator = authenticator
        self._session = self._make_session(access_token)
        self._session_lock = threading.Lock()
        self._auth_lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    @property
    def user_agent(self) -> str:
        return self._user_agent

    @property
    def config(self) -> AppConfig:
        return self._cfg

    def is_user(self) -> bool:
        with self._auth_lock:
            return self._authenticator.is_user()

    def get(
        self, url: str, params: Optional[Mapping[str, Any]] = None
    ) -> requests.Response:
        """
        GET `url` with the current token.

        Returns the response on 200. On 401/403 logs in again, rebuilds
        the session and retries once. Any other status, or a second
        rejection, raises AuthenticationError.
        """
        with self._session_lock:
            resp = self._request(url, params)
            if self._check_auth(resp):
                return resp

            logger.info(
                "Token rejected (status=%s) for %s; logging in again",
                resp.status_code,
                url,
            )
            with self._auth_lock:
                self._authenticator.login()
                access_token = self._current_access_token(self._authenticator)

            old_session = self._session
            self._session = self._make_session(access_token)
            old_session.close()

            resp = self._request(url, params)
            if resp.status_code == 200:
                return resp

            logger.warning(
                "Still rejected after new token: status=%s url=%s",
                resp.status_code,
                url,
            )
            raise AuthenticationError(
                "Failed to authenticate, even after requesting new token. Check credentials.",
                status_code=resp.status_code,
            )

    def get_json(self, url: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Same as `get()`, decoding the body as JSON.
        """
        resp = self.get(url, params)
        try:
            return resp.json()
        except ValueError as exc:
            raise DecodeError(f"Could not decode response from {url}: {exc}") from exc

    def close(self) -> None:
        with self._session_lock:
            self._session.close()

    def __enter__(self) -> "AuthenticatedClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Internal
    # -------------------------------------------------------------------------

    def _request(
        self, url: str, params: Optional[Mapping[str, Any]]
    ) -> requests.Response:
        # Caller holds the session lock.
        try:
            if params is not None:
                return self._session.get(
                    url, params=params, timeout=self._cfg.http.timeout_seconds
                )
            return self._session.get(url, timeout=self._cfg.http.timeout_seconds)
        except requests.RequestException as exc:
            raise TransportError(f"GET {url} failed: {exc}") from exc

    @staticmethod
    def _check_auth(resp: requests.Response) -> bool:
        """
        True if the request went through, False if the token was
        rejected. Any other status is an error and is never retried.
        """
        status = resp.status_code
        if status == 200:
            return True
        if status in (401, 403):
            return False
        raise AuthenticationError(
            f"Reddit returned an unexpected code: {status}", status_code=status
        )

    @staticmethod
    def _current_access_token(authenticator: Authenticator) -> str:
        token = authenticator.token()
        if token is None:
            raise AuthenticationError(MISSING_TOKEN_MESSAGE)
        return token.access_token

    def _make_session(self, access_token: str) -> requests.Session:
        session = self._session_factory()
        session.headers.update(
            {
                "Authorization": f"bearer {access_token}",
                "User-Agent": self._user_agent,
            }
        )
        return session
