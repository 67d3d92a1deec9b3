"""
Text cleaning helpers shared by the renderer, the matcher and the output layer.
"""

import re

_TAG_RE = re.compile(r"<[^>]+>")
_WS_RE = re.compile(r"\s+")


def strip_html(text: str) -> str:
    """Drop tags (each becomes a space) and collapse whitespace. Case is kept."""
    return _WS_RE.sub(" ", _TAG_RE.sub(" ", text)).strip()


def normalize_text(text: str) -> str:
    """
    Canonical form used for paragraph matching: tags stripped, whitespace
    collapsed, lowercased. Both sides of a comparison go through this.
    """
    return strip_html(text).lower()
