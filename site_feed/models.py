"""Shared data models for site_feed."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, FrozenSet, Mapping, Optional
from urllib.parse import urlsplit

from . import __version__

COMMUNITY_TAG = "community"


@dataclass(frozen=True)
class Author:
    """Identity of the single author of the site."""

    name: str
    email: str = ""


@dataclass(frozen=True)
class SiteConfig:
    """Site-wide configuration shared by every feed."""

    title: str
    description: str
    author: Author
    base_url: str

    def __post_init__(self) -> None:
        base_url = self.base_url.strip().rstrip("/")
        parts = urlsplit(base_url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"Site base URL must be absolute: {self.base_url!r}")
        object.__setattr__(self, "base_url", base_url)

    def url_for(self, path: str) -> str:
        """Join a site-relative path onto the base URL."""
        return f"{self.base_url}/{path.lstrip('/')}"


def _parse_timestamp(value: Any, key: str) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    else:
        raise ValueError(f"Entry field '{key}' must be an ISO 8601 timestamp.")
    if parsed.tzinfo is None:
        raise ValueError(f"Entry field '{key}' is missing a timezone offset: {value}")
    return parsed


@dataclass(frozen=True)
class ContentEntry:
    """A rendered, published piece of site content."""

    title: str
    permalink: str
    published: datetime
    body: str
    summary: Optional[str] = None
    updated: Optional[datetime] = None
    tags: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not self.title.strip():
            raise ValueError(f"Entry {self.permalink} has an empty title.")
        if self.updated is None:
            object.__setattr__(self, "updated", self.published)
        tags = self.tags
        if isinstance(tags, str):
            tags = (tags,)
        object.__setattr__(self, "tags", frozenset(tags))

    @property
    def id(self) -> str:
        return self.permalink

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ContentEntry":
        """Build an entry from a JSON snapshot record."""
        try:
            title = data["title"]
            permalink = data["permalink"]
        except KeyError as exc:
            raise ValueError(f"Entry record is missing {exc.args[0]!r}.") from exc

        published_raw = data.get("published", data.get("date"))
        if published_raw is None:
            raise ValueError(f"Entry {permalink} has no publication date.")
        published = _parse_timestamp(published_raw, "published")

        updated_raw = data.get("updated")
        updated = _parse_timestamp(updated_raw, "updated") if updated_raw else None

        return cls(
            title=title,
            permalink=permalink,
            published=published,
            updated=updated,
            body=data.get("body", data.get("content", "")),
            summary=data.get("summary"),
            tags=data.get("tags") or (),
        )


class FeedVariant(enum.Enum):
    """Rendering mode of a feed."""

    STANDARD = "standard"
    COMMUNITY_REPOST = "community"

    @property
    def title_label(self) -> str:
        if self is FeedVariant.COMMUNITY_REPOST:
            return " - Community"
        return ""

    @classmethod
    def for_tag(cls, tag: Optional[str]) -> "FeedVariant":
        """Classify a feed scoped to ``tag`` (or the main feed when ``None``)."""
        if tag == COMMUNITY_TAG:
            return cls.COMMUNITY_REPOST
        return cls.STANDARD


@dataclass(frozen=True)
class FeedOptions:
    """Fixed links and generator identity supplied by the caller."""

    self_url: str
    icon_url: Optional[str] = None
    logo_url: Optional[str] = None
    generator: str = "site_feed"
    generator_uri: Optional[str] = None
    generator_version: str = __version__

    @classmethod
    def for_site(cls, config: SiteConfig, feed_path: str = "feed.xml") -> "FeedOptions":
        return cls(
            self_url=config.url_for(feed_path),
            icon_url=config.url_for("favicon.ico"),
            logo_url=config.url_for("logo.png"),
        )
