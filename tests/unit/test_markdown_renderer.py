import pytest

from iwsearch.websearch.MarkdownRenderer import (
    SECTION_SEPARATOR,
    MarkdownRenderer,
    extract_paragraphs,
)
from iwsearch.websearch.ParagraphMatcher import find_paragraph_ids
from iwsearch.websearch.types import ChapterContent, ChapterSection


@pytest.fixture()
def renderer() -> MarkdownRenderer:
    return MarkdownRenderer()


def test_flat_chapter_paragraphs(renderer: MarkdownRenderer) -> None:
    content = ChapterContent(text="First paragraph.\n\nSecond paragraph.")
    assert renderer.chapter_paragraphs(content) == ["First paragraph.", "Second paragraph."]


def test_flat_chapter_ends_with_separator(renderer: MarkdownRenderer) -> None:
    html = renderer.render_chapter(ChapterContent(text="Only one."))
    assert html is not None
    assert html.endswith(SECTION_SEPARATOR)
    assert html.count(SECTION_SEPARATOR) == 1


def test_sections_number_continuously(renderer: MarkdownRenderer) -> None:
    content = ChapterContent(
        sections=[
            ChapterSection(title="Section One", text="Alpha.\n\nBeta."),
            ChapterSection(title="Section Two", text="Gamma."),
        ]
    )
    html = renderer.render_chapter(content)
    assert "<h2>Section One</h2>" in html
    assert "<h2>Section Two</h2>" in html
    assert html.count(SECTION_SEPARATOR) == 2
    assert renderer.chapter_paragraphs(content) == ["Alpha.", "Beta.", "Gamma."]


def test_title_only_section_adds_no_paragraph_or_separator(renderer: MarkdownRenderer) -> None:
    content = ChapterContent(
        sections=[
            ChapterSection(title="Heading Only"),
            ChapterSection(text="Body."),
        ]
    )
    html = renderer.render_chapter(content)
    assert html.count(SECTION_SEPARATOR) == 1
    assert renderer.chapter_paragraphs(content) == ["Body."]


@pytest.mark.parametrize("counts", [[1], [3], [2, 2], [1, 0, 4], [5, 1, 1, 2]])
def test_paragraph_count_matches_body_paragraphs(
    renderer: MarkdownRenderer, counts: list
) -> None:
    sections = []
    n = 0
    for s, count in enumerate(counts):
        body = "\n\n".join(f"Paragraph {n + i + 1} text." for i in range(count))
        n += count
        sections.append(ChapterSection(title=f"Part {s + 1}", text=body or None))

    paragraphs = renderer.chapter_paragraphs(ChapterContent(sections=sections))

    assert len(paragraphs) == n
    assert paragraphs == [f"Paragraph {i} text." for i in range(1, n + 1)]


def test_no_content_yields_none(renderer: MarkdownRenderer) -> None:
    assert renderer.render_chapter(ChapterContent()) is None
    assert renderer.chapter_paragraphs(ChapterContent()) is None


def test_sections_take_precedence_over_flat_text(renderer: MarkdownRenderer) -> None:
    content = ChapterContent(text="Ignored.", sections=[ChapterSection(text="Used.")])
    assert renderer.chapter_paragraphs(content) == ["Used."]


def body_paragraphs(renderer: MarkdownRenderer, text: str) -> list:
    return extract_paragraphs(renderer.render_body(text))


def test_single_newlines_become_hard_breaks(renderer: MarkdownRenderer) -> None:
    paragraphs = body_paragraphs(renderer, "line one\nline two")
    assert len(paragraphs) == 1
    assert "<br" in paragraphs[0]


def test_body_uses_smart_punctuation(renderer: MarkdownRenderer) -> None:
    (paragraph,) = body_paragraphs(renderer, 'He said "yes" -- twice.')
    assert "“" in paragraph and "”" in paragraph
    assert "–" in paragraph


def test_body_smart_punctuation_covers_em_dash_and_ellipsis(renderer: MarkdownRenderer) -> None:
    (paragraph,) = body_paragraphs(renderer, "Wait---and then... silence.")
    assert paragraph == "Wait—and then… silence."


def test_body_keeps_symbol_like_sequences(renderer: MarkdownRenderer) -> None:
    (paragraph,) = body_paragraphs(
        renderer, "Terms (a) matter, (b) life and (c) mind; (r) (tm) +- ,, and!!!!"
    )
    assert paragraph == "Terms (a) matter, (b) life and (c) mind; (r) (tm) +- ,, and!!!!"


def test_enumeration_markers_still_match_after_rendering(renderer: MarkdownRenderer) -> None:
    paragraphs = renderer.chapter_paragraphs(
        ChapterContent(text="Intro.\n\nThe three terms are (a) matter, (b) life and (c) mind.")
    )
    assert find_paragraph_ids(paragraphs, "(b) life and (c) mind.") == [2]


def test_dashes_left_alone_in_inline_code(renderer: MarkdownRenderer) -> None:
    (paragraph,) = body_paragraphs(renderer, "Run `a -- b` now.")
    assert "<code>a -- b</code>" in paragraph


def test_title_pass_has_no_smart_punctuation(renderer: MarkdownRenderer) -> None:
    html = renderer.render_title("Rock -- Roll")
    assert html.startswith("<h2>")
    assert "--" in html
    assert "–" not in html


def test_tables_are_rendered_without_paragraphs(renderer: MarkdownRenderer) -> None:
    html = renderer.render_body("| a | b |\n|---|---|\n| 1 | 2 |")
    assert "<table>" in html
    assert extract_paragraphs(html) == []


def test_footnotes_are_supported(renderer: MarkdownRenderer) -> None:
    html = renderer.render_body("Text with a note[^1].\n\n[^1]: The note.")
    assert "footnote-ref" in html
    assert "The note." in html


def test_extract_paragraphs_scans_in_order() -> None:
    html = "<h2>T</h2>\n<p>one</p><hr><p>two\n<em>x</em></p><P>three</P>"
    assert extract_paragraphs(html) == ["one", "two\n<em>x</em>", "three"]
