"""Helpers for normalising provider output."""
from __future__ import annotations

import re
from typing import Optional

EMPTY_RESPONSE_TEXT = "No response generated"

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")


def or_placeholder(text: Optional[str]) -> str:
    """Trim ``text`` and fall back to the placeholder when nothing is left."""
    cleaned = (text or "").strip()
    return cleaned or EMPTY_RESPONSE_TEXT


def strip_markup(text: Optional[str]) -> str:
    """Remove markup tags and collapse runs of whitespace.

    Raw text-generation endpoints echo template tokens such as ``<s>`` or
    ``</assistant>`` and pad output with newlines.
    """
    cleaned = _TAG_RE.sub("", text or "")
    cleaned = _WHITESPACE_RE.sub(" ", cleaned)
    return or_placeholder(cleaned)
