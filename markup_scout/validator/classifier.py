# File: markup_scout/validator/classifier.py
"""Decide which validation strategy applies to a document, from its doctype alone."""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from urllib.parse import urlparse

__all__ = ["DocumentKind", "Classification", "classify", "find_system_id"]


class DocumentKind(Enum):
    XHTML = "xhtml"
    HTML5 = "html5"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class Classification:
    """Outcome of :func:`classify`.

    ``namespace`` (e.g. ``xhtml1-strict``) and ``system_id`` are only set for
    :attr:`DocumentKind.XHTML`.
    """

    kind: DocumentKind
    namespace: Optional[str] = None
    system_id: Optional[str] = None


UNKNOWN = Classification(DocumentKind.UNKNOWN)
HTML5 = Classification(DocumentKind.HTML5)

# <!DOCTYPE root PUBLIC "fpi" "system"> or <!DOCTYPE root SYSTEM "system">
_DOCTYPE_RE = re.compile(
    r"""<!DOCTYPE\s+[^\s>\[]+\s+
        (?:PUBLIC\s+(?:"[^"]*"|'[^']*')\s*|SYSTEM\s+)
        (?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)')""",
    re.IGNORECASE | re.VERBOSE,
)
_HTML5_RE = re.compile(r"\A\s*<!DOCTYPE html>", re.IGNORECASE)


def find_system_id(body: str) -> Optional[str]:
    """Return the system identifier of the document type declaration, if any."""
    match = _DOCTYPE_RE.search(body)
    if match is None:
        return None
    return match.group("dq") if match.group("dq") is not None else match.group("sq")


def _namespace(system_id: str) -> Optional[str]:
    parsed = urlparse(system_id)
    path = parsed.path
    # opaque URIs such as about:legacy-compat carry no path
    if parsed.scheme and not parsed.netloc and not path.startswith("/"):
        return None
    base = posixpath.basename(path)
    if base.endswith(".dtd"):
        base = base[: -len(".dtd")]
    return base or None


def classify(body: str) -> Classification:
    """Total and deterministic: every body maps to exactly one classification."""
    system_id = find_system_id(body)
    if system_id:
        namespace = _namespace(system_id)
        if namespace:
            return Classification(DocumentKind.XHTML, namespace, system_id)
    if _HTML5_RE.match(body):
        return HTML5
    return UNKNOWN
