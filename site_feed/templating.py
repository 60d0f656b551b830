"""Jinja2 environment for site_feed templates."""

from __future__ import annotations

import re
from datetime import datetime
from importlib import resources
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from markupsafe import Markup

_ENV: Environment | None = None

_HTML_WHITESPACE = re.compile(r"[ \t\n\f\r]+")

# Code points outside the XML 1.0 Char production.
_XML_ILLEGAL = re.compile(
    "[^\u0009\u000a\u000d\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)

_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def collapse_whitespace(value: str | None) -> str:
    """Collapse whitespace runs to single spaces and trim both ends."""
    if not value:
        return ""
    # str() drops any Markup wrapper so autoescaping still applies.
    return _HTML_WHITESPACE.sub(" ", str(value)).strip()


def strip_xml_illegal(value: Any) -> Any:
    """Drop characters that may not appear in an XML 1.0 document."""
    if isinstance(value, Markup):
        return Markup(_XML_ILLEGAL.sub("", value))
    if isinstance(value, str):
        return _XML_ILLEGAL.sub("", value)
    return value


def rfc3339(value: datetime) -> str:
    """Format a timezone-aware datetime as RFC 3339 with an explicit offset."""
    return value.isoformat(timespec="seconds")


def long_date(value: datetime) -> str:
    """Render a date as e.g. ``January 1, 2025`` independent of locale."""
    return f"{_MONTHS[value.month - 1]} {value.day}, {value.year}"


def get_environment() -> Environment:
    """Return a cached Jinja environment configured for package templates."""
    global _ENV
    if _ENV is None:
        template_dir = resources.files(__package__) / "templates"
        loader = FileSystemLoader(str(template_dir))
        _ENV = Environment(
            loader=loader,
            autoescape=select_autoescape(["html", "xml", "xml.j2"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
            finalize=strip_xml_illegal,
        )
        _ENV.filters["collapse_whitespace"] = collapse_whitespace
        _ENV.filters["rfc3339"] = rfc3339
        _ENV.filters["long_date"] = long_date
    return _ENV
