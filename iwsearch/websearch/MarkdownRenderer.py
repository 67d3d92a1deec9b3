"""
Chapter markdown to paragraph segmentation.

The reader pages number every rendered <p> as p1, p2, ... . To point a link
at a paragraph we render the chapter exactly the way the site does and count
the same <p> elements:

- body text: hard line breaks, smart punctuation, footnotes, GFM tables and
  strikethrough
- section titles: an <h2> from a separate, option-less pass
- an <hr> after every section body (and after a flat chapter)

Headings and separators never produce paragraphs, so numbering runs on
continuously across sections.
"""

import re
from typing import List, Optional

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from mdit_py_plugins.footnote import footnote_plugin

from ..core.logging import get_logger
from .types import ChapterContent

logger = get_logger(__name__)

SECTION_SEPARATOR = "<hr>"

# Rendered output is well formed and <p> never nests, so a lazy scan is enough.
_PARAGRAPH_RE = re.compile(r"<p>([\s\S]*?)</p>", re.IGNORECASE)


_SMARTYPANTS = (
    (re.compile(r"---"), "—"),
    (re.compile(r"--"), "–"),
    (re.compile(r"\.{3}"), "…"),
)


def _smartypants_dashes(state: StateCore) -> None:
    """
    Dashes and ellipses only, the way the site's smartypants pass does it.

    markdown-it's own "replacements" rule also rewrites (c), (tm), +- and
    friends, which the site leaves alone.
    """
    for block in state.tokens:
        if block.type != "inline" or not block.children:
            continue
        inside_autolink = 0
        for token in block.children:
            if token.type == "link_open" and token.info == "auto":
                inside_autolink += 1
            elif token.type == "link_close" and token.info == "auto":
                inside_autolink -= 1
            elif token.type == "text" and not inside_autolink:
                content = token.content
                for pattern, replacement in _SMARTYPANTS:
                    content = pattern.sub(replacement, content)
                token.content = content


def _build_body_renderer() -> MarkdownIt:
    md = MarkdownIt("commonmark", {"breaks": True, "typographer": True})
    md.enable(["table", "strikethrough", "smartquotes"])
    md.core.ruler.before("smartquotes", "smartypants_dashes", _smartypants_dashes)
    md.use(footnote_plugin)
    return md


def _build_title_renderer() -> MarkdownIt:
    return MarkdownIt("commonmark")


class MarkdownRenderer:
    """Renders chapter content to HTML and splits it into paragraphs."""

    def __init__(self) -> None:
        self._body = _build_body_renderer()
        self._title = _build_title_renderer()

    def render_body(self, text: str) -> str:
        return self._body.render(text)

    def render_title(self, title: str) -> str:
        # Titles deliberately skip the body options; markup in a title is
        # rendered the way the bare renderer would.
        return self._title.render(f"## {title}")

    def render_chapter(self, content: ChapterContent) -> Optional[str]:
        """
        Render a whole chapter to one HTML document.

        Returns:
            The HTML, or None when the chapter has neither sections nor text.
        """
        if content.sections is not None:
            html_parts: List[str] = []
            for section in content.sections:
                if section.title:
                    html_parts.append(self.render_title(section.title))
                if section.text:
                    html_parts.append(self.render_body(section.text))
                    html_parts.append(SECTION_SEPARATOR)
            return "".join(html_parts)

        if content.text:
            return self.render_body(content.text) + SECTION_SEPARATOR

        return None

    def chapter_paragraphs(self, content: ChapterContent) -> Optional[List[str]]:
        """Paragraph HTML fragments in page order, or None for an empty chapter."""
        html = self.render_chapter(content)
        if html is None:
            return None
        return extract_paragraphs(html)


def extract_paragraphs(html: str) -> List[str]:
    """Inner HTML of every <p>...</p> element, in document order."""
    return _PARAGRAPH_RE.findall(html)
