from __future__ import annotations

"""
Handles for Reddit listings. In the API, a 'thing' is a kind plus a
fullname; these handles only know where a listing lives and hand out
feeds over it.
"""

from .clients.authenticated_client import AuthenticatedClient
from .feeds import PostFeed


class Subreddit:
    """
    A handle to a subreddit. See `PostFeed` for the gotchas of iterating
    over posts.
    """

    def __init__(self, url: str, client: AuthenticatedClient) -> None:
        self.url = url
        self._client = client

    def hot(self) -> PostFeed:
        return self._posts_sorted("hot")

    def new(self) -> PostFeed:
        return self._posts_sorted("new")

    def random(self) -> PostFeed:
        return self._posts_sorted("random")

    def rising(self) -> PostFeed:
        return self._posts_sorted("rising")

    def top(self) -> PostFeed:
        return self._posts_sorted("top")

    def _posts_sorted(self, sort: str) -> PostFeed:
        return PostFeed(
            self._client,
            f"{self.url}/{sort}",
            limit=self._client.config.feed.default_limit,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(url={self.url!r})"


class Frontpage(Subreddit):
    """
    The frontpage. Same sorts as a subreddit, plus `best`.
    """

    def best(self) -> PostFeed:
        return self._posts_sorted("best")
