from __future__ import annotations

import logging
from typing import Optional

import requests

from .clients.auth import Authenticator, SessionFactory
from .clients.authenticated_client import AuthenticatedClient
from .config import AppConfig, get_config
from .errors import DecodeError
from .models import Me
from .things import Frontpage, Subreddit

logger = logging.getLogger(__name__)


class Reddit:
    """
    Entry point to the Reddit API.

    Logs in on construction; every handle and feed created from it shares
    the same authenticated client, so one instance can serve many threads
    (one feed per thread).

    Usage:
        auth = ApplicationAuthenticator(ClientInfo("id", "secret"))
        with Reddit(auth, "linux:myapp:v0.1 (by /u/me)") as reddit:
            for post in itertools.islice(reddit.subreddit("python").hot(), 5):
                print(post.title)
    """

    def __init__(
        self,
        authenticator: Authenticator,
        user_agent: str,
        config: Optional[AppConfig] = None,
        session_factory: SessionFactory = requests.Session,
    ) -> None:
        self._cfg = config or get_config()
        self.client = AuthenticatedClient(
            authenticator,
            user_agent,
            config=self._cfg,
            session_factory=session_factory,
        )

    def subreddit(self, name: str) -> Subreddit:
        return Subreddit(f"{self._cfg.endpoints.api_base_url}/r/{name}", self.client)

    def frontpage(self) -> Frontpage:
        return Frontpage(self._cfg.endpoints.api_base_url, self.client)

    def me(self) -> Me:
        """
        Information about the logged in user.

        Only meaningful with a user authenticator; anonymous sessions are
        refused by Reddit and surface as AuthenticationError.
        """
        payload = self.client.get_json(self._cfg.endpoints.me_url)
        if not isinstance(payload, dict):
            raise DecodeError(f"Expected an object from /me, got {type(payload).__name__}")
        me = Me.from_dict(payload)
        logger.debug("Fetched identity: name=%s", me.name)
        return me

    def is_user(self) -> bool:
        return self.client.is_user()

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "Reddit":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
