# File: tests/test_frontier.py
import pytest

from markup_scout.crawler.frontier import Frontier, normalize_url


@pytest.mark.parametrize(
    "a,b",
    [
        ("http://Example.COM", "http://example.com/"),
        ("HTTP://example.com/a#top", "http://example.com/a"),
        ("http://example.com//a//b", "http://example.com/a/b"),
        ("http://example.com/a/./b/../c", "http://example.com/a/c"),
        ("http://example.com/my%20page", "http://example.com/my page"),
    ],
)
def test_equivalent_urls_normalize_equal(a, b):
    assert normalize_url(a) == normalize_url(b)


def test_trailing_slash_and_query_are_significant():
    assert normalize_url("http://example.com/dir/") != normalize_url("http://example.com/dir")
    assert normalize_url("http://example.com/?a=1") != normalize_url("http://example.com/")
    assert normalize_url("http://example.com/?b=2&a=1") == "http://example.com/?b=2&a=1"


def test_frontier_admits_each_url_once():
    frontier = Frontier()
    assert frontier.push("http://example.com/")
    assert frontier.push("http://example.com/a")
    assert not frontier.push("http://EXAMPLE.com/a#x")
    assert len(frontier) == 2
    assert frontier.pop() == "http://example.com/"
    assert not frontier.push("http://example.com")
    assert "http://example.com/a" in frontier
    assert frontier.seen_count == 2


def test_marked_urls_are_never_queued():
    frontier = Frontier()
    frontier.mark_seen("http://example.com/final")
    assert not frontier.push("http://example.com/final")
    assert not frontier
