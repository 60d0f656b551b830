from datetime import datetime, timezone

import pytest

from site_feed.models import (
    Author,
    ContentEntry,
    FeedOptions,
    FeedVariant,
    SiteConfig,
)


def test_site_config_normalizes_base_url():
    config = SiteConfig(
        title="Site",
        description="",
        author=Author("Jane"),
        base_url=" https://jane.example/// ",
    )

    assert config.base_url == "https://jane.example"
    assert config.url_for("/feed.xml") == "https://jane.example/feed.xml"
    assert config.url_for("tags/x/feed.xml") == "https://jane.example/tags/x/feed.xml"


@pytest.mark.parametrize("base_url", ["/relative", "jane.example", "ftp://jane.example"])
def test_site_config_rejects_non_absolute_base_url(base_url):
    with pytest.raises(ValueError):
        SiteConfig(title="Site", description="", author=Author("Jane"), base_url=base_url)


def test_site_config_is_immutable(site_config):
    with pytest.raises(AttributeError):
        site_config.title = "Other"


def test_content_entry_defaults(make_entry):
    entry = make_entry("a", tags=["b", "a", "b"])

    assert entry.id == "https://jane.example/posts/a"
    assert entry.updated == entry.published
    assert entry.tags == frozenset({"a", "b"})


def test_content_entry_requires_title(make_entry):
    with pytest.raises(ValueError):
        make_entry("a", title="")


def test_content_entry_from_dict():
    entry = ContentEntry.from_dict(
        {
            "title": "Post",
            "permalink": "https://jane.example/posts/post",
            "date": "2025-01-01T00:00:00Z",
            "updated": "2025-03-01T10:00:00+01:00",
            "tags": ["community"],
            "summary": "Short",
            "content": "<p>Long</p>",
        }
    )

    assert entry.published == datetime(2025, 1, 1, tzinfo=timezone.utc)
    assert entry.updated.utcoffset().total_seconds() == 3600
    assert entry.tags == frozenset({"community"})
    assert entry.body == "<p>Long</p>"
    assert entry.summary == "Short"


def test_content_entry_from_dict_without_summary():
    entry = ContentEntry.from_dict(
        {
            "title": "Post",
            "permalink": "https://jane.example/posts/post",
            "published": "2025-01-01T00:00:00+00:00",
            "body": "<p>Long</p>",
        }
    )

    assert entry.summary is None
    assert entry.updated == entry.published


@pytest.mark.parametrize(
    "record",
    [
        {"permalink": "https://jane.example/p", "date": "2025-01-01T00:00:00Z"},
        {"title": "T", "permalink": "https://jane.example/p"},
        {"title": "T", "permalink": "https://jane.example/p", "date": "2025-01-01T00:00:00"},
        {"title": "T", "permalink": "https://jane.example/p", "date": 20250101},
    ],
)
def test_content_entry_from_dict_rejects_bad_records(record):
    with pytest.raises(ValueError):
        ContentEntry.from_dict(record)


def test_feed_variant_for_tag():
    assert FeedVariant.for_tag("community") is FeedVariant.COMMUNITY_REPOST
    assert FeedVariant.for_tag("elixir") is FeedVariant.STANDARD
    assert FeedVariant.for_tag(None) is FeedVariant.STANDARD
    assert FeedVariant.COMMUNITY_REPOST.title_label == " - Community"
    assert FeedVariant.STANDARD.title_label == ""


def test_feed_options_for_site(site_config):
    options = FeedOptions.for_site(site_config, "tags/community/feed.xml")

    assert options.self_url == "https://jane.example/tags/community/feed.xml"
    assert options.icon_url == "https://jane.example/favicon.ico"
    assert options.logo_url == "https://jane.example/logo.png"
    assert options.generator == "site_feed"


def test_content_entry_rejects_blank_title(make_entry):
    with pytest.raises(ValueError):
        make_entry("a", title="  \n\t")


def test_content_entry_treats_string_tags_as_one_tag(make_entry):
    assert make_entry("a", tags="elixir").tags == frozenset({"elixir"})


def test_content_entry_from_dict_with_string_tags():
    entry = ContentEntry.from_dict(
        {
            "title": "Post",
            "permalink": "https://jane.example/posts/post",
            "date": "2025-01-01T00:00:00Z",
            "tags": "elixir",
            "summary": "Short",
            "content": "<p>Long</p>",
        }
    )

    assert entry.tags == frozenset({"elixir"})
