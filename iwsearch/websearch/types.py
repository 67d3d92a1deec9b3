from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Literal, Optional
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field


class DeepLinkMode(str, Enum):
    """Which parts of a deep link to synthesize."""

    NONE = "none"
    SEARCH = "search"
    PARAGRAPH = "paragraph"
    BOTH = "both"

    @property
    def wants_search(self) -> bool:
        return self in (DeepLinkMode.SEARCH, DeepLinkMode.BOTH)

    @property
    def wants_paragraph(self) -> bool:
        return self in (DeepLinkMode.PARAGRAPH, DeepLinkMode.BOTH)


@dataclass(frozen=True)
class ResultPath:
    """One breadcrumb entry, from author down to sub-section."""

    title: str
    url: Optional[str] = None

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "ResultPath":
        return cls(title=item.get("t") or "", url=item.get("u"))

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"t": self.title}
        if self.url is not None:
            data["u"] = self.url
        return data


@dataclass(frozen=True)
class SearchResult:
    """A single hit returned by the search API.

    ``snippet`` keeps the API's highlight markup (``<strong>``) untouched;
    cleaned copies are produced with ``dataclasses.replace``.
    """

    url: str
    title: str
    snippet: str = ""
    path: List[ResultPath] = field(default_factory=list)
    searched_in: Optional[str] = None

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "SearchResult":
        return cls(
            url=item.get("url") or "",
            title=item.get("t") or "",
            snippet=item.get("txt") or "",
            path=[ResultPath.from_api(p) for p in item.get("path") or []],
            searched_in=item.get("searchedIn"),
        )

    @property
    def crumbs(self) -> List[str]:
        """Non-empty breadcrumb titles in order."""
        return [p.title for p in self.path if p.title]

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "url": self.url,
            "t": self.title,
            "txt": self.snippet,
            "path": [p.to_dict() for p in self.path],
        }
        if self.searched_in is not None:
            data["searchedIn"] = self.searched_in
        return data


@dataclass
class SearchResponse:
    """Parsed payload of one search API page."""

    results: List[SearchResult]
    total_count: Optional[int] = None
    total_pages: Optional[int] = None
    suggesters: List[str] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "SearchResponse":
        paging = data.get("Paging") or {}
        return cls(
            results=[SearchResult.from_api(item) for item in data.get("c") or []],
            total_count=paging.get("TotalCount"),
            total_pages=paging.get("TotalPagesCount"),
            suggesters=list(data.get("suggesters") or []),
        )


@dataclass(frozen=True)
class ChapterSection:
    title: Optional[str] = None
    text: Optional[str] = None


@dataclass(frozen=True)
class ChapterContent:
    """Chapter body as served by the chapter API.

    Either a flat ``text`` blob or an ordered list of titled ``sections``.
    """

    text: Optional[str] = None
    sections: Optional[List[ChapterSection]] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "ChapterContent":
        """Non-string ``txt``/``t`` values are treated as absent."""
        items = data.get("items")
        sections = None
        if isinstance(items, list):
            sections = [
                ChapterSection(title=_text_field(item, "t"), text=_text_field(item, "txt"))
                for item in items
                if isinstance(item, dict)
            ]
        return cls(text=_text_field(data, "txt"), sections=sections)


def _text_field(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class Citation:
    author: str
    work: str
    section: str
    title: str
    url: str
    deep_url: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        data = {
            "author": self.author,
            "work": self.work,
            "section": self.section,
            "title": self.title,
            "url": self.url,
        }
        if self.deep_url:
            data["deepUrl"] = self.deep_url
        return data


class SearchParams(BaseModel):
    """
    Every option the search accepts.

    Fields that map to API query parameters are sent by ``to_query``;
    ``strip_html``, ``max_snippet`` and ``deep_link`` only shape local output.
    Unknown fields and out-of-range enum values are rejected.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    q: str = Field(min_length=1)
    page: int = Field(default=1, ge=1)
    auth: Optional[Literal["sa", "m", "any"]] = None
    comp: Optional[Literal["cwsa", "sabcl", "arya", "cwm", "agenda", "any"]] = None
    vol: Optional[str] = None
    phrase: Optional[bool] = None
    any_term: Optional[bool] = Field(default=None, alias="anyTerm")
    searched: Optional[
        Literal["volumes", "compilations", "reference", "conversation"]
    ] = None
    priority_index: Optional[bool] = Field(default=None, alias="priorityIndex")
    sortby: Optional[
        Literal[
            "dateAsc",
            "dateDesc",
            "scoreAsc",
            "scoreDesc",
            "volumeChapterAsc",
            "volumeChapterDesc",
        ]
    ] = None
    strip_html: Optional[bool] = Field(default=None, alias="stripHtml")
    max_snippet: Optional[int] = Field(default=None, gt=0, alias="maxSnippet")
    deep_link: DeepLinkMode = Field(default=DeepLinkMode.NONE, alias="deepLink")

    def to_query(self) -> str:
        """Encode the API-facing fields as a query string, in API order."""
        query: List[tuple] = [("q", self.q), ("page", str(self.page))]
        if self.auth and self.auth != "any":
            query.append(("auth", self.auth))
        if self.comp and self.comp != "any":
            query.append(("comp", self.comp))
        if self.vol:
            query.append(("vol", self.vol))
        for key, flag in (("phrase", self.phrase), ("anyTerm", self.any_term)):
            if flag is not None:
                query.append((key, "true" if flag else "false"))
        if self.searched:
            query.append(("searched", self.searched))
        if self.priority_index is not None:
            query.append(("priorityIndex", "true" if self.priority_index else "false"))
        if self.sortby:
            query.append(("sortby", self.sortby))
        return urlencode(query)
