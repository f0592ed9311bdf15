import pytest

from newsletter_agent.core.utils import (
    clean_generated_title,
    extract_source_from_url,
    heuristic_summary,
    round_half_up,
    truncate_text,
)


@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://www.example.com/article", "Example"),
        ("https://alice.substack.com/p/post", "Alice (Substack)"),
        ("https://openai.com/blog", "OpenAI"),
        ("https://blog.example.co.uk/story", "Blog"),
        ("", ""),
    ],
)
def test_extract_source_from_url(url, expected):
    assert extract_source_from_url(url) == expected


@pytest.mark.parametrize("value,expected", [(6.5, 7), (7.49, 7), (2.5, 3), (8.0, 8)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_truncate_text():
    assert truncate_text("abcdef", 3) == "abc..."
    assert truncate_text("abc", 3) == "abc"


def test_heuristic_summary_takes_two_sentences():
    text = "First point. Second point! Third point?"
    assert heuristic_summary(text) == "First point. Second point!"


def test_heuristic_summary_without_sentences_uses_prefix():
    text = "word " * 100
    summary = heuristic_summary(text)
    assert summary.endswith("...")
    assert len(summary) == 203


@pytest.mark.parametrize(
    "raw,expected",
    [
        ('"The Week in AI"', "The Week in AI"),
        ("\n\n**Bold headline**\nextra", "Bold headline"),
        ("TITLE: Cheaper Models", "Cheaper Models"),
        ("  \n ", ""),
    ],
)
def test_clean_generated_title(raw, expected):
    assert clean_generated_title(raw) == expected
