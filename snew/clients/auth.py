from __future__ import annotations

import json
import logging
from typing import Callable, Dict, Optional, Protocol, runtime_checkable

import requests

from ..config import AppConfig, default_user_agent, get_config
from ..errors import AuthenticationError, DecodeError, TransportError
from ..models import ClientInfo, Credentials, Token

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], requests.Session]


@runtime_checkable
class Authenticator(Protocol):
    """
    Something that can provide access to the Reddit API.

    Implementations own the long-lived credentials and perform the token
    exchange; AuthenticatedClient only ever talks to them through these
    three methods.
    """

    def login(self) -> None:
        """
        Fetch (or refresh) the token from the Reddit API.

        Raises AuthenticationError or TransportError on failure.
        """
        raise NotImplementedError

    def token(self) -> Optional[Token]:
        """
        The current token, or None before the first successful login.
        If it is outdated, `login()` should be called to refresh it.
        """
        raise NotImplementedError

    def is_user(self) -> bool:
        """
        True if requests made with this authenticator act as an end user
        (voting, commenting, ...), False for read-only browsing.
        """
        raise NotImplementedError


def exchange_token(
    client_info: ClientInfo,
    form: Dict[str, str],
    session_factory: SessionFactory,
    config: AppConfig,
) -> Token:
    """
    POST a grant to the token endpoint and interpret the answer.

    Reddit can answer 200 OK with {"error": "..."} when the user's
    credentials are wrong, so the status code alone is not trusted.
    The body is tried, in order, as:
    - a token -> returned,
    - an {"error": ...} payload -> wrong username/password,
    - anything with status 401 -> wrong client id/secret,
    - anything else -> unexpected, body and status in the message.
    """
    grant_type = form.get("grant_type", "")
    logger.debug("Requesting token: grant_type=%s url=%s", grant_type, config.endpoints.token_url)

    try:
        with session_factory() as session:
            resp = session.post(
                config.endpoints.token_url,
                data=form,
                auth=(client_info.client_id, client_info.client_secret),
                headers={"User-Agent": default_user_agent()},
                timeout=config.http.timeout_seconds,
            )
            status = resp.status_code
            text = resp.text
    except requests.RequestException as exc:
        raise TransportError(f"Token request failed: {exc}") from exc

    payload = None
    try:
        payload = json.loads(text)
    except ValueError:
        pass

    if isinstance(payload, dict):
        try:
            token = Token.from_dict(payload)
        except DecodeError:
            token = None
        if token is not None:
            logger.info(
                "Obtained token: grant_type=%s scope=%s expires_in=%s",
                grant_type,
                token.scope,
                token.expires_in,
            )
            return token

        error = payload.get("error")
        if isinstance(error, str):
            logger.warning("Token request rejected: grant_type=%s error=%s", grant_type, error)
            raise AuthenticationError(
                f"Username or password are most likely wrong, Reddit returned: {error}",
                status_code=status,
            )

    if status == 401:
        logger.warning("Token request rejected with 401: grant_type=%s", grant_type)
        raise AuthenticationError(
            "Client ID or Secret are wrong. Reddit returned 401 Unauthorized",
            status_code=status,
        )

    logger.error("Unexpected token response: grant_type=%s status=%s", grant_type, status)
    raise AuthenticationError(
        f"Unexpected error occurred, text: {text}, code: {status}",
        status_code=status,
    )


class ScriptAuthenticator:
    """
    Authenticator for 'script' applications (password grant).

    Carries a username and password, so you are logged in and can do
    things such as voting. See the Reddit OAuth API docs.
    """

    def __init__(
        self,
        credentials: Credentials,
        config: Optional[AppConfig] = None,
        session_factory: SessionFactory = requests.Session,
    ) -> None:
        self._credentials = credentials
        self._cfg = config or get_config()
        self._session_factory = session_factory
        self._token: Optional[Token] = None

    def login(self) -> None:
        self._token = exchange_token(
            self._credentials.client_info,
            {
                "grant_type": "password",
                "username": self._credentials.username,
                "password": self._credentials.password,
            },
            self._session_factory,
            self._cfg,
        )

    def token(self) -> Optional[Token]:
        return self._token

    def is_user(self) -> bool:
        return True


class ApplicationAuthenticator:
    """
    Anonymous authentication (client credentials grant).

    Still needs a client ID and secret, but you are not logged in as any
    user: you can browse Reddit, not vote.
    """

    def __init__(
        self,
        client_info: ClientInfo,
        config: Optional[AppConfig] = None,
        session_factory: SessionFactory = requests.Session,
    ) -> None:
        self._client_info = client_info
        self._cfg = config or get_config()
        self._session_factory = session_factory
        self._token: Optional[Token] = None

    def login(self) -> None:
        self._token = exchange_token(
            self._client_info,
            {"grant_type": "client_credentials"},
            self._session_factory,
            self._cfg,
        )

    def token(self) -> Optional[Token]:
        return self._token

    def is_user(self) -> bool:
        return False
