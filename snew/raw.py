from __future__ import annotations

"""
Raw response shapes from the Reddit API.

These mirror the JSON Reddit sends and exist only while a page is being
decoded. Use `snew.models.Post` and friends instead; they cover the
regular use cases.
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, Type, TypeVar

from .errors import DecodeError

T = TypeVar("T")


def require(payload: Mapping[str, Any], key: str, kind: Type[T], where: str) -> T:
    """
    Fetch `payload[key]` and check its type, raising DecodeError otherwise.

    bool is a subclass of int in Python, so it is rejected explicitly
    where an int is expected.
    """
    if not isinstance(payload, Mapping):
        raise DecodeError(f"{where}: expected an object, got {type(payload).__name__}")
    if key not in payload:
        raise DecodeError(f"{where}: missing field '{key}'")

    value = payload[key]
    if kind is int and isinstance(value, bool):
        raise DecodeError(f"{where}.{key}: expected int, got bool")
    if not isinstance(value, kind):
        raise DecodeError(
            f"{where}.{key}: expected {kind.__name__}, got {type(value).__name__}"
        )
    return value


@dataclass
class RawPostData:
    title: str
    ups: int
    downs: int
    url: str
    author: str
    selftext: str
    id: str

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "RawPostData":
        where = "post"
        return cls(
            title=require(payload, "title", str, where),
            ups=require(payload, "ups", int, where),
            downs=require(payload, "downs", int, where),
            url=require(payload, "url", str, where),
            author=require(payload, "author", str, where),
            selftext=require(payload, "selftext", str, where),
            id=require(payload, "id", str, where),
        )


@dataclass
class RawKind:
    """
    A 'thing': a kind marker (t1 comment, t3 link, ...) plus its data.
    """

    kind: str
    data: RawPostData

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "RawKind":
        kind = require(payload, "kind", str, "thing")
        data = require(payload, "data", dict, "thing")
        return cls(kind=kind, data=RawPostData.from_dict(data))


@dataclass
class RawListingData:
    after: str  # "" when Reddit sent null: no further pages
    children: List[RawKind]


@dataclass
class RawListing:
    data: RawListingData

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "RawListing":
        data = require(payload, "data", dict, "listing")

        after = data.get("after")
        if after is None:
            after = ""
        elif not isinstance(after, str):
            raise DecodeError(
                f"listing.data.after: expected str, got {type(after).__name__}"
            )

        children = require(data, "children", list, "listing.data")
        return cls(
            data=RawListingData(
                after=after,
                children=[RawKind.from_dict(child) for child in children],
            )
        )
