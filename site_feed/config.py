"""Configuration loading for the site feed."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .models import Author, SiteConfig

logger = logging.getLogger(__name__)

DEFAULT_FEED_FILENAME = "feed.xml"


@dataclass
class SiteSettings:
    site: SiteConfig
    feed_filename: str = DEFAULT_FEED_FILENAME
    generate_feeds: bool = True
    feed_limit: Optional[int] = None


def load_site_config(path: str) -> SiteSettings:
    """Parse a Zola style ``config.toml`` into feed settings."""
    config_path = Path(path).resolve()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    logger.info("Loading site configuration from %s", config_path)
    with config_path.open("rb") as handle:
        try:
            data = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ValueError(f"Config file is not valid TOML: {exc}") from exc

    base_url = data.get("base_url")
    if not base_url:
        raise ValueError("Config missing 'base_url'")
    title = data.get("title")
    if not title:
        raise ValueError("Config missing 'title'")

    extra = data.get("extra", {})
    author = Author(
        name=extra.get("full_name") or title,
        email=extra.get("email", ""),
    )
    site = SiteConfig(
        title=title,
        description=data.get("description", ""),
        author=author,
        base_url=base_url,
    )

    feed_limit = data.get("feed_limit")
    valid_limit = type(feed_limit) is int and feed_limit > 0
    if feed_limit is not None and not valid_limit:
        raise ValueError(f"Config 'feed_limit' must be a positive integer: {feed_limit!r}")

    filenames = data.get("feed_filenames") or [DEFAULT_FEED_FILENAME]
    settings = SiteSettings(
        site=site,
        feed_filename=filenames[0],
        generate_feeds=bool(data.get("generate_feeds", True)),
        feed_limit=feed_limit,
    )
    logger.debug("Loaded site settings: %s", settings)
    return settings
