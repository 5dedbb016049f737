from __future__ import annotations

import re

_TAG_RE = re.compile(r"<[^>]*>")
_WS_RE = re.compile(r"\s+")


def strip_tags(text: str | None) -> str:
    """Remove markup tags, keep everything else (including line breaks)."""
    return _TAG_RE.sub("", text or "")


def normalize_text(text: str | None) -> str:
    """Strip markup, collapse whitespace runs to one space and trim."""
    return _WS_RE.sub(" ", strip_tags(text)).strip()
