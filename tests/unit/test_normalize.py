"""Tests for the text and URL normalisation helpers."""

from __future__ import annotations

import pytest

from ddg_search.utils.normalize import normalize_text, normalize_url


@pytest.mark.parametrize("raw", [None, ""])
def test_normalize_text_returns_empty_string_for_missing_input(raw: str | None) -> None:
    """Missing markup normalises to an empty string."""
    assert normalize_text(raw) == ""


def test_normalize_text_strips_tags_and_unescapes_quotes() -> None:
    """Tags are removed and quote entities decoded."""
    raw = "The <b>cat</b> said &quot;meow&quot; <a href='x'>here</a>"
    assert normalize_text(raw) == 'The cat said "meow" here'


def test_normalize_text_leaves_other_entities_untouched() -> None:
    """Only ``&quot;`` is unescaped."""
    assert normalize_text("Tom &amp; Jerry") == "Tom &amp; Jerry"


@pytest.mark.parametrize("value", ["plain words", "a > b but c", 'already "clean"'])
def test_normalize_text_is_idempotent_on_clean_input(value: str) -> None:
    """Clean text passes through unchanged, however often it is normalised."""
    once = normalize_text(value)
    assert once == value
    assert normalize_text(once) == once


def test_normalize_url_replaces_only_the_first_space() -> None:
    """Only the first space of a URL becomes ``+``."""
    assert normalize_url("https://img.example/a b c.jpg") == "https://img.example/a+b c.jpg"


@pytest.mark.parametrize("url", [None, ""])
def test_normalize_url_returns_empty_string_for_missing_input(url: str | None) -> None:
    """Missing URLs normalise to an empty string."""
    assert normalize_url(url) == ""
