"""High-level orchestration for building a feed file."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .config import load_site_config
from .models import ContentEntry, FeedOptions, FeedVariant
from .synthesizer import synthesize

logger = logging.getLogger(__name__)


@dataclass
class RunConfig:
    """Runtime options for building a feed."""

    config_file: str
    entries_file: str
    output_path: Optional[str] = None
    tag: Optional[str] = None
    now: Optional[datetime] = None


@dataclass
class RunResult:
    """Returned data after building a feed."""

    output_text: str
    entry_count: int
    variant: FeedVariant


def _load_entries_from_file(path: str) -> List[ContentEntry]:
    location = Path(path)
    try:
        payload = json.loads(location.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise RuntimeError(f"Entry snapshot not found: {location}") from exc
    except json.JSONDecodeError as exc:
        raise RuntimeError(f"Entry snapshot is not valid JSON: {location}") from exc

    if not isinstance(payload, list):
        raise RuntimeError("Entry snapshot must contain a JSON array.")

    entries: List[ContentEntry] = []
    for item in payload:
        if not isinstance(item, dict):
            raise RuntimeError("Entry snapshot must contain objects only.")
        entries.append(ContentEntry.from_dict(item))

    logger.info("Loaded %d entries from %s", len(entries), location)
    return entries


def _write_output(path: str, text: str) -> None:
    location = Path(path)
    if location.parent and not location.parent.exists():
        location.parent.mkdir(parents=True, exist_ok=True)
    location.write_text(text, encoding="utf-8")
    logger.info("Wrote feed to %s", location)


def execute(config: RunConfig) -> RunResult:
    settings = load_site_config(config.config_file)
    if not settings.generate_feeds:
        raise RuntimeError("Feed generation is disabled in the site configuration.")

    entries = _load_entries_from_file(config.entries_file)
    if settings.feed_limit is not None and len(entries) > settings.feed_limit:
        logger.info(
            "Keeping the first %d of %d entries (feed_limit)",
            settings.feed_limit,
            len(entries),
        )
        entries = entries[: settings.feed_limit]
    variant = FeedVariant.for_tag(config.tag)

    feed_path = settings.feed_filename
    if config.tag:
        feed_path = f"tags/{config.tag}/{feed_path}"
    options = FeedOptions.for_site(settings.site, feed_path)

    document = synthesize(
        settings.site, variant, entries, options=options, now=config.now
    )

    if config.output_path:
        _write_output(config.output_path, document)

    return RunResult(output_text=document, entry_count=len(entries), variant=variant)
