from __future__ import annotations

import pytest

from snew import Frontpage, PostFeed, Reddit, Subreddit
from snew.config import AppConfig, EndpointConfig
from snew.errors import AuthenticationError, DecodeError
from tests.unit.reddit_fakes import FakeAuthenticator, FakeResponse, FakeTransport, listing_page

AGENT = "linux:snew-tests:v0.1 (by /u/tester)"
ME_BODY = {
    "name": "alice",
    "total_karma": 3,
    "link_karma": 1,
    "comment_karma": 2,
    "verified": False,
}


def make_reddit(transport: FakeTransport, user: bool = False, config: AppConfig | None = None) -> Reddit:
    return Reddit(
        FakeAuthenticator(user=user),
        AGENT,
        config=config,
        session_factory=transport.session_factory,
    )


@pytest.mark.parametrize("sort", ["hot", "new", "random", "rising", "top"])
def test_subreddit_sorts_build_fresh_feeds(sort: str) -> None:
    reddit = make_reddit(FakeTransport())
    subreddit = reddit.subreddit("rust")

    feed = getattr(subreddit, sort)()

    assert isinstance(subreddit, Subreddit)
    assert isinstance(feed, PostFeed)
    assert feed.url == f"https://oauth.reddit.com/r/rust/{sort}"
    assert feed.limit == 100
    assert feed.after == ""
    assert getattr(subreddit, sort)() is not feed


def test_frontpage_supports_best() -> None:
    transport = FakeTransport(gets=[listing_page(["front"], after=None)])
    reddit = make_reddit(transport)

    frontpage = reddit.frontpage()
    feed = frontpage.best()

    assert isinstance(frontpage, Frontpage)
    assert feed.url == "https://oauth.reddit.com/best"
    assert next(feed).title == "front"


def test_api_base_url_comes_from_config() -> None:
    config = AppConfig(endpoints=EndpointConfig(api_base_url="http://localhost:8080"))
    reddit = make_reddit(FakeTransport(), config=config)

    assert reddit.subreddit("python").new().url == "http://localhost:8080/r/python/new"


def test_me_fetches_identity() -> None:
    transport = FakeTransport(gets=[FakeResponse(200, ME_BODY)])
    reddit = make_reddit(transport, user=True)

    me = reddit.me()

    assert me.name == "alice"
    assert me.comment_karma == 2
    assert reddit.is_user() is True
    assert transport.calls_for("GET")[0].url == "https://oauth.reddit.com/api/v1/me"


def test_me_is_not_cached() -> None:
    transport = FakeTransport(gets=[FakeResponse(200, ME_BODY), FakeResponse(200, dict(ME_BODY, total_karma=4))])
    reddit = make_reddit(transport, user=True)

    assert reddit.me().total_karma == 3
    assert reddit.me().total_karma == 4


def test_anonymous_me_surfaces_authentication_error() -> None:
    transport = FakeTransport(gets=[FakeResponse(403), FakeResponse(403)])
    reddit = make_reddit(transport)

    assert reddit.is_user() is False
    with pytest.raises(AuthenticationError):
        reddit.me()


def test_me_with_unexpected_body_is_a_decode_error() -> None:
    transport = FakeTransport(gets=[FakeResponse(200, {"name": "alice"})])
    reddit = make_reddit(transport, user=True)

    with pytest.raises(DecodeError):
        reddit.me()


def test_close_closes_session() -> None:
    transport = FakeTransport()

    with make_reddit(transport):
        pass

    assert transport.sessions[-1].closed
