from typing import Optional, Sequence
from urllib.parse import quote

from ..core.settings import settings
from .types import Citation, DeepLinkMode, SearchResult

# Characters JavaScript's encodeURIComponent leaves alone; the reader page
# decodes ?search= with its counterpart.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def paragraph_anchor(paragraph_ids: Sequence[int]) -> Optional[str]:
    """
    Fragment for a set of paragraph ids.

    [4] -> "p4", [4, 5] -> "p4-p5", anything else -> "p2,p3,p4" style list.
    """
    ids = sorted(paragraph_ids)
    if not ids:
        return None
    if len(ids) == 1:
        return f"p{ids[0]}"
    if len(ids) == 2 and ids[1] == ids[0] + 1:
        return f"p{ids[0]}-p{ids[1]}"
    return ",".join(f"p{i}" for i in ids)


def build_deep_url(
    base_page_url: str,
    query: str,
    paragraph_ids: Sequence[int],
    mode: DeepLinkMode,
) -> str:
    """Append ?search= and/or #pN to a page URL according to the mode."""
    mode = DeepLinkMode(mode)
    url = base_page_url
    if mode.wants_search:
        url += f"?search={encode_uri_component(query)}"
    if mode.wants_paragraph:
        anchor = paragraph_anchor(paragraph_ids)
        if anchor:
            url += f"#{anchor}"
    return url


def page_url(result: SearchResult, base_url: Optional[str] = None) -> str:
    if not result.url:
        return ""
    return f"{base_url if base_url is not None else settings.base_url}{result.url}"


def to_citation(
    result: SearchResult,
    deep_url: Optional[str] = None,
    base_url: Optional[str] = None,
) -> Citation:
    """Citation fields from the breadcrumb: author > work > section..."""
    crumbs = result.crumbs
    return Citation(
        author=crumbs[0] if len(crumbs) > 0 else "",
        work=crumbs[1] if len(crumbs) > 1 else "",
        section=" > ".join(crumbs[2:]),
        title=result.title,
        url=page_url(result, base_url),
        deep_url=deep_url,
    )
