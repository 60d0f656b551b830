from datetime import datetime, timezone

import pytest

from site_feed.models import Author, ContentEntry, SiteConfig

FIXED_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def site_config():
    return SiteConfig(
        title="Jane's Log",
        description="Notes on software & such.",
        author=Author(name="Jane Doe", email="jane@jane.example"),
        base_url="https://jane.example/",
    )


@pytest.fixture
def make_entry():
    def _make(slug="a", **overrides):
        fields = {
            "title": slug.upper(),
            "permalink": f"https://jane.example/posts/{slug}",
            "published": datetime(2025, 1, 1, tzinfo=timezone.utc),
            "summary": "Hi",
            "body": "<p>Hi</p>",
        }
        fields.update(overrides)
        return ContentEntry(**fields)

    return _make


@pytest.fixture
def fixed_now():
    return FIXED_NOW
