"""Atom 1.0 feed synthesis from rendered site content."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence

from markupsafe import Markup

from .models import ContentEntry, FeedOptions, FeedVariant, SiteConfig
from .templating import (
    collapse_whitespace,
    get_environment,
    long_date,
    strip_xml_illegal,
)

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "atom.xml.j2"

_ATTRIBUTION = Markup(
    "<p>This post was originally published by {author} on "
    '<a href="{permalink}">{site}</a> on {date}.</p>'
)


class MissingSummaryError(ValueError):
    """Raised when an entry handed to the feed has no summary."""

    def __init__(self, entry_id: str):
        super().__init__(f"Feed entry {entry_id} has no summary.")
        self.entry_id = entry_id


def _standard_content(config: SiteConfig, entry: ContentEntry) -> str:
    return collapse_whitespace(entry.body)


def _community_content(config: SiteConfig, entry: ContentEntry) -> str:
    attribution = _ATTRIBUTION.format(
        author=config.author.name,
        permalink=entry.permalink,
        site=config.title,
        date=long_date(entry.published),
    )
    return collapse_whitespace(entry.body) + str(attribution)


_CONTENT_RENDERERS: Dict[FeedVariant, Callable[[SiteConfig, ContentEntry], str]] = {
    FeedVariant.STANDARD: _standard_content,
    FeedVariant.COMMUNITY_REPOST: _community_content,
}


def validate_entries(entries: Sequence[ContentEntry]) -> None:
    """Ensure every entry carries a usable summary."""
    for entry in entries:
        if not collapse_whitespace(strip_xml_illegal(entry.summary)):
            raise MissingSummaryError(entry.id)


def synthesize(
    config: SiteConfig,
    variant: FeedVariant,
    entries: Sequence[ContentEntry],
    options: Optional[FeedOptions] = None,
    now: Optional[datetime] = None,
) -> str:
    """Render ``entries`` as an Atom document, keeping their order.

    The returned text is the complete XML document. ``now`` becomes the
    feed-level ``updated`` timestamp; pass a fixed value for reproducible
    output. Raises :class:`MissingSummaryError` before rendering anything if
    an entry lacks a summary.
    """
    validate_entries(entries)

    if options is None:
        options = FeedOptions.for_site(config)
    if now is None:
        now = datetime.now(timezone.utc)

    render_content = _CONTENT_RENDERERS[variant]
    items: List[dict] = []
    for entry in entries:
        logger.debug("Adding feed entry %s", entry.id)
        items.append(
            {
                "entry": entry,
                "tags": sorted(entry.tags),
                "content": render_content(config, entry),
            }
        )

    template = get_environment().get_template(TEMPLATE_NAME)
    document = template.render(
        site=config,
        options=options,
        feed_title=config.title + variant.title_label,
        updated=now,
        items=items,
    )
    logger.info("Synthesized %s feed with %d entries", variant.value, len(items))
    return document
