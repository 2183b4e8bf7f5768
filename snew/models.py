from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .errors import DecodeError
from .raw import RawKind, require

# Reddit's kind marker for links/posts.
POST_KIND = "t3"


@dataclass(frozen=True)
class Token:
    """
    An access token handed out by the token exchange.

    Only authenticators build these, from a successful exchange. A new
    login replaces the whole Token; it is never mutated.
    """

    access_token: str = field(repr=False)
    expires_in: int
    scope: str
    token_type: str

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Token":
        where = "token"
        return cls(
            access_token=require(payload, "access_token", str, where),
            expires_in=require(payload, "expires_in", int, where),
            scope=require(payload, "scope", str, where),
            token_type=require(payload, "token_type", str, where),
        )


@dataclass(frozen=True)
class ClientInfo:
    """
    Client ID and secret of the registered Reddit application.
    """

    client_id: str
    client_secret: str = field(repr=False)

    @classmethod
    def from_env(cls) -> Optional["ClientInfo"]:
        """
        Load application credentials from environment variables.

        Expected variables:
        - REDDIT_CLIENT_ID
        - REDDIT_CLIENT_SECRET

        Returns None if any required variable is missing.
        """
        client_id = os.getenv("REDDIT_CLIENT_ID")
        client_secret = os.getenv("REDDIT_CLIENT_SECRET")

        if not (client_id and client_secret):
            return None

        return cls(client_id=client_id, client_secret=client_secret)


@dataclass(frozen=True)
class Credentials:
    """
    Application credentials plus the end user's login.
    """

    client_info: ClientInfo
    username: str
    password: str = field(repr=False)

    @classmethod
    def create(
        cls, client_id: str, client_secret: str, username: str, password: str
    ) -> "Credentials":
        return cls(
            client_info=ClientInfo(client_id=client_id, client_secret=client_secret),
            username=username,
            password=password,
        )

    @classmethod
    def from_env(cls) -> Optional["Credentials"]:
        """
        Same as ClientInfo.from_env(), plus REDDIT_USERNAME and
        REDDIT_PASSWORD. Returns None if any variable is missing.
        """
        client_info = ClientInfo.from_env()
        username = os.getenv("REDDIT_USERNAME")
        password = os.getenv("REDDIT_PASSWORD")

        if client_info is None or not (username and password):
            return None

        return cls(client_info=client_info, username=username, password=password)


@dataclass(frozen=True)
class Post:
    """
    A single post from a listing.

    The caller owns it once a feed yields it; the feed keeps no reference.
    """

    title: str
    ups: int  # upvotes
    downs: int  # downvotes
    url: str  # external link for link posts, otherwise the comment section
    author: str
    selftext: str  # body text, empty for link posts
    id: str  # base36 id, without the kind prefix
    kind: str  # always "t3" for posts

    @property
    def fullname(self) -> str:
        return f"{self.kind}_{self.id}"

    @classmethod
    def from_raw(cls, raw: RawKind) -> "Post":
        if raw.kind != POST_KIND:
            raise DecodeError(
                f"Expected a post of kind '{POST_KIND}', got '{raw.kind}' (id={raw.data.id})"
            )
        data = raw.data
        return cls(
            title=data.title,
            ups=data.ups,
            downs=data.downs,
            url=data.url,
            author=data.author,
            selftext=data.selftext,
            id=data.id,
            kind=raw.kind,
        )


@dataclass(frozen=True)
class Me:
    """
    Snapshot of the authenticated user. Fetched on demand, never cached.
    """

    name: str
    total_karma: int
    link_karma: int
    comment_karma: int
    verified: bool

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Me":
        where = "me"
        return cls(
            name=require(payload, "name", str, where),
            total_karma=require(payload, "total_karma", int, where),
            link_karma=require(payload, "link_karma", int, where),
            comment_karma=require(payload, "comment_karma", int, where),
            verified=require(payload, "verified", bool, where),
        )
