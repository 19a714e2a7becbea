# markup_scout/crawler/frontier.py
"""
URL normalization and the at-most-once frontier used by the live crawler.
"""
from __future__ import annotations

import posixpath
from collections import deque
from typing import Deque, Iterator, Set
from urllib.parse import quote, unquote, urlparse, urlunparse


def normalize_url(url: str) -> str:
    """
    Canonical form used for visited-set membership.

    Lowercases scheme and host, drops the fragment, collapses dot segments
    and duplicate slashes (keeping a trailing slash), and uses "/" for an
    empty path. The query string is kept verbatim.
    """
    parsed = urlparse(url)
    scheme = parsed.scheme.lower()
    netloc = parsed.netloc.lower()
    path = unquote(parsed.path or "/")
    norm = posixpath.normpath(path)
    # normpath keeps a leading "//"
    if norm.startswith("//"):
        norm = "/" + norm.lstrip("/")
    if path.endswith("/") and not norm.endswith("/"):
        norm += "/"
    if not norm.startswith("/"):
        norm = "/" + norm
    norm = quote(norm, safe="/:@!$&'()*+,;=~-._")
    return urlunparse((scheme, netloc, norm, parsed.params, parsed.query, ""))


class Frontier:
    """Queue of URLs still to visit plus the set of every URL ever admitted.

    A URL is admitted once per run: :meth:`push` returns False for any URL
    whose normalized form has already been seen, queued or visited.
    """

    def __init__(self) -> None:
        self._queue: Deque[str] = deque()
        self._seen: Set[str] = set()

    def push(self, url: str) -> bool:
        key = normalize_url(url)
        if key in self._seen:
            return False
        self._seen.add(key)
        self._queue.append(key)
        return True

    def mark_seen(self, url: str) -> None:
        """Admit *url* without queueing it (e.g. a redirect target already fetched)."""
        self._seen.add(normalize_url(url))

    def pop(self) -> str:
        return self._queue.popleft()

    def __contains__(self, url: object) -> bool:
        return isinstance(url, str) and normalize_url(url) in self._seen

    def __bool__(self) -> bool:
        return bool(self._queue)

    def __len__(self) -> int:
        return len(self._queue)

    def __iter__(self) -> Iterator[str]:
        return iter(self._queue)

    @property
    def seen_count(self) -> int:
        return len(self._seen)


__all__ = ["Frontier", "normalize_url"]
