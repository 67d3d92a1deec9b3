"""
Locate search hits inside a chapter's rendered paragraphs.
"""

import math
import re
from typing import List, Sequence

from ..core.logging import get_logger
from .text import normalize_text, strip_html

logger = get_logger(__name__)

# The search API wraps the matched text in <strong>; punctuation that the page
# shows right after the match sits just outside the closing tag.
_HIGHLIGHT_RE = re.compile(r"<strong>([\s\S]*?)</strong>([.,;:!?])?", re.IGNORECASE)

PROBE_OFFSET_RATIO = 0.1
PROBE_MAX_LENGTH = 80
PROBE_MIN_LENGTH = 10


def extract_search_hit(raw_snippet: str, fallback: str) -> str:
    """
    Return the first highlighted phrase of a raw snippet as it reads on the page.

    Args:
        raw_snippet: Snippet exactly as returned by the search API
        fallback: Returned unchanged when the snippet has no highlight

    Returns:
        The highlighted text with inner markup removed, plus one trailing
        punctuation character if it directly follows the highlight.
    """
    match = _HIGHLIGHT_RE.search(raw_snippet)
    if not match:
        return fallback
    return strip_html(match.group(1)) + (match.group(2) or "")


def _scan(normalized_paragraphs: Sequence[str], needle: str) -> List[int]:
    return [i + 1 for i, para in enumerate(normalized_paragraphs) if needle in para]


def _probe(norm: str) -> str:
    start = math.floor(len(norm) * PROBE_OFFSET_RATIO)
    end = min(start + PROBE_MAX_LENGTH, len(norm))
    return norm[start:end].strip()


def find_paragraph_ids(paragraphs: Sequence[str], snippet: str) -> List[int]:
    """
    1-indexed positions of every paragraph containing the snippet.

    The whole normalized snippet is tried first. Only if no paragraph
    contains it, an interior slice (starting 10% in, at most 80 characters)
    is tried instead, because the edges of a snippet are where tag stripping
    leaves spacing artifacts. Slices shorter than 10 characters are not
    trusted and yield no match.
    """
    norm = normalize_text(snippet)
    if not norm:
        return []

    normalized = [normalize_text(p) for p in paragraphs]

    ids = _scan(normalized, norm)
    if ids:
        return ids

    probe = _probe(norm)
    if len(probe) < PROBE_MIN_LENGTH:
        logger.debug(f"Probe too short to match: '{probe}'")
        return []

    ids = _scan(normalized, probe)
    if ids:
        logger.debug(f"Matched via interior probe '{probe[:30]}...' in paragraphs {ids}")
    return ids
