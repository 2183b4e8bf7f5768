from __future__ import annotations

import logging
from typing import Iterator, List

from .clients.authenticated_client import AuthenticatedClient
from .errors import DecodeError
from .models import Post
from .raw import RawListing

logger = logging.getLogger(__name__)

# Consecutive pages without posts after which a feed gives up, even if
# Reddit still hands out a cursor.
MAX_EMPTY_PAGES = 2


class PostFeed(Iterator[Post]):
    """
    Lazily iterate over the posts of a listing, one page at a time.

    As long as Reddit hands out an `after` cursor the feed keeps fetching
    pages, so you will usually want to bound it:

        for post in itertools.islice(reddit.subreddit("python").hot(), 10):
            ...

    `limit` is how many posts each request asks for, not a cap on the
    total. If you know you only need a handful of posts, set it lower so
    the first request does not fetch more than needed; otherwise keep the
    default of 100, the most Reddit allows.

    Errors (TransportError, AuthenticationError, DecodeError) are raised
    from `next()` without touching the cursor or the buffer, so calling
    `next()` again retries the same page. A page without posts but with a
    cursor is skipped over. The feed ends when a page has no further
    cursor, or after two empty pages in a row; it cannot be restarted,
    create a new one.
    Not safe to share between threads; use one feed per thread on top of
    a shared client.
    """

    def __init__(self, client: AuthenticatedClient, url: str, limit: int = 100) -> None:
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")

        self._client = client
        self._url = url
        self._limit = min(limit, client.config.feed.max_limit)
        self._after = ""
        # Stack in reverse page order: pop() hands out posts in page order.
        self._buffer: List[Post] = []
        self._empty_pages = 0
        self._exhausted = False

    @property
    def url(self) -> str:
        return self._url

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def after(self) -> str:
        return self._after

    def __iter__(self) -> "PostFeed":
        return self

    def __next__(self) -> Post:
        while not self._buffer:
            if self._exhausted:
                raise StopIteration
            self._load_page()
        return self._buffer.pop()

    def _load_page(self) -> None:
        listing = self._fetch_page()

        # Decode the whole page before touching any state.
        posts = [Post.from_raw(child) for child in listing.data.children]

        self._after = listing.data.after
        self._buffer.extend(reversed(posts))
        self._empty_pages = 0 if posts else self._empty_pages + 1
        if not self._after or self._empty_pages >= MAX_EMPTY_PAGES:
            self._exhausted = True

        logger.debug(
            "Fetched page: url=%s posts=%d after=%r", self._url, len(posts), self._after
        )

    def _fetch_page(self) -> RawListing:
        params = {"limit": self._limit, "after": self._after}
        logger.debug("Fetching page: url=%s params=%s", self._url, params)

        payload = self._client.get_json(self._url, params)
        if not isinstance(payload, dict):
            raise DecodeError(
                f"Expected a listing object from {self._url}, got {type(payload).__name__}"
            )
        return RawListing.from_dict(payload)
