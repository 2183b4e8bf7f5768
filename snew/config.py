from __future__ import annotations

from dataclasses import dataclass, field


__version__ = "0.1.0"


# ---------- Endpoint configuration ----------


@dataclass
class EndpointConfig:
    """
    Where the Reddit API lives.

    The token exchange goes to www.reddit.com; everything authenticated
    with a bearer token goes to oauth.reddit.com.
    """

    token_url: str = "https://www.reddit.com/api/v1/access_token"
    api_base_url: str = "https://oauth.reddit.com"
    me_path: str = "/api/v1/me"

    @property
    def me_url(self) -> str:
        return f"{self.api_base_url}{self.me_path}"


# ---------- HTTP configuration ----------


@dataclass
class HttpConfig:
    """
    Settings for the requests sessions used by authenticators and clients.
    """

    timeout_seconds: float = 10.0  # per-request timeout, the only cancellation we have


# ---------- Feed configuration ----------


@dataclass
class FeedConfig:
    """
    Paging defaults for listing feeds.
    """

    # Reddit never returns more than 100 items per listing page
    default_limit: int = 100
    max_limit: int = 100


# ---------- Top-level application configuration ----------


@dataclass
class AppConfig:
    endpoints: EndpointConfig = field(default_factory=EndpointConfig)
    http: HttpConfig = field(default_factory=HttpConfig)
    feed: FeedConfig = field(default_factory=FeedConfig)


def get_config() -> AppConfig:
    """
    Main entrypoint to get the full library config.

    Usage:
        from snew.config import get_config
        cfg = get_config()
        cfg.endpoints.token_url
    """
    return AppConfig()


def default_user_agent() -> str:
    """
    User-Agent sent with the token exchange request.

    Reddit asks for `<platform>:<app id>:<version> (by <user>)`.
    """
    return f"desktop:snew:{__version__} (by snewAuthenticator)"
