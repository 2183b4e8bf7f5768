from __future__ import annotations

import dataclasses

import pytest

from snew.errors import DecodeError
from snew.models import ClientInfo, Credentials, Me, Post, Token
from snew.raw import RawKind, RawListing
from tests.unit.reddit_fakes import listing_body, post_child, token_body


def test_token_decodes_exchange_body_and_hides_secret_in_repr() -> None:
    token = Token.from_dict(token_body("s3cret"))

    assert token.access_token == "s3cret"
    assert token.token_type == "bearer"
    assert "s3cret" not in repr(token)


def test_token_is_immutable() -> None:
    token = Token.from_dict(token_body())

    with pytest.raises(dataclasses.FrozenInstanceError):
        token.access_token = "other"  # type: ignore[misc]


@pytest.mark.parametrize(
    "payload",
    [
        {"error": "invalid_grant"},
        {"access_token": "a", "expires_in": "3600", "scope": "*", "token_type": "bearer"},
        {"access_token": "a", "expires_in": True, "scope": "*", "token_type": "bearer"},
    ],
)
def test_token_rejects_malformed_bodies(payload) -> None:
    with pytest.raises(DecodeError):
        Token.from_dict(payload)


def test_listing_decodes_null_after_as_empty_cursor() -> None:
    listing = RawListing.from_dict(listing_body([post_child("1", "a")], after=None))

    assert listing.data.after == ""
    assert [child.data.title for child in listing.data.children] == ["a"]


def test_listing_rejects_missing_post_fields() -> None:
    child = post_child("1", "a")
    del child["data"]["ups"]

    with pytest.raises(DecodeError, match="ups"):
        RawListing.from_dict(listing_body([child]))


def test_post_from_raw_checks_kind() -> None:
    raw = RawKind.from_dict(post_child("1", "a", kind="t1"))

    with pytest.raises(DecodeError):
        Post.from_raw(raw)


def test_me_decodes_identity() -> None:
    me = Me.from_dict(
        {
            "name": "alice",
            "total_karma": 30,
            "link_karma": 10,
            "comment_karma": 20,
            "verified": True,
            "is_gold": False,
        }
    )

    assert me.name == "alice"
    assert me.total_karma == 30
    assert me.verified is True


def test_credentials_hide_secrets_in_repr() -> None:
    creds = Credentials.create("id", "app-secret", "alice", "hunter2")

    text = repr(creds)
    assert "alice" in text
    assert "hunter2" not in text
    assert "app-secret" not in text


def test_credentials_from_env(monkeypatch) -> None:
    monkeypatch.setenv("REDDIT_CLIENT_ID", "id")
    monkeypatch.setenv("REDDIT_CLIENT_SECRET", "secret")
    monkeypatch.setenv("REDDIT_USERNAME", "alice")
    monkeypatch.setenv("REDDIT_PASSWORD", "pw")

    creds = Credentials.from_env()

    assert creds == Credentials.create("id", "secret", "alice", "pw")
    assert ClientInfo.from_env() == ClientInfo("id", "secret")


def test_credentials_from_env_missing_vars(monkeypatch) -> None:
    monkeypatch.setenv("REDDIT_CLIENT_ID", "id")
    monkeypatch.setenv("REDDIT_CLIENT_SECRET", "secret")
    monkeypatch.delenv("REDDIT_USERNAME", raising=False)
    monkeypatch.delenv("REDDIT_PASSWORD", raising=False)

    assert Credentials.from_env() is None
    assert ClientInfo.from_env() is not None

    monkeypatch.delenv("REDDIT_CLIENT_SECRET")
    assert ClientInfo.from_env() is None
