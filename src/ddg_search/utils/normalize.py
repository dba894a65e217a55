"""Text and URL clean-up applied to every emitted search result."""

from __future__ import annotations

import re

REGEX_STRIP_TAGS = re.compile(r"<.*?>")


def normalize_text(raw_html: str | None) -> str:
    """Strip markup tags and unescape ``&quot;`` entities.

    Only the quote entity is decoded; the backend escapes nothing else in the
    snippets it serves.
    """
    if not raw_html:
        return ""
    return REGEX_STRIP_TAGS.sub("", raw_html).replace("&quot;", '"')


def normalize_url(url: str | None) -> str:
    """Replace the first literal space of ``url`` with ``+``."""
    if not url:
        return ""
    return url.replace(" ", "+", 1)


__all__ = ["REGEX_STRIP_TAGS", "normalize_text", "normalize_url"]
