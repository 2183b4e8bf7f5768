from __future__ import annotations

"""
snew: authenticated, paginated access to Reddit listings.

Start from `Reddit`, give it an authenticator and a User-Agent, then ask
it for a subreddit or the frontpage and iterate over a sort:

    reddit = Reddit(ApplicationAuthenticator(ClientInfo(id, secret)), agent)
    for post in itertools.islice(reddit.subreddit("rust").hot(), 3):
        print(post.title)
"""

from .clients import (
    ApplicationAuthenticator,
    AuthenticatedClient,
    Authenticator,
    ScriptAuthenticator,
)
from .config import AppConfig, __version__, get_config
from .errors import AuthenticationError, DecodeError, SnewError, TransportError
from .feeds import PostFeed
from .models import ClientInfo, Credentials, Me, Post, Token
from .reddit import Reddit
from .things import Frontpage, Subreddit

__all__ = [
    "__version__",
    "AppConfig",
    "get_config",
    "Authenticator",
    "ScriptAuthenticator",
    "ApplicationAuthenticator",
    "AuthenticatedClient",
    "Reddit",
    "Subreddit",
    "Frontpage",
    "PostFeed",
    "Token",
    "ClientInfo",
    "Credentials",
    "Post",
    "Me",
    "SnewError",
    "TransportError",
    "AuthenticationError",
    "DecodeError",
]
