"""
iwsearch CLI - search Incarnate Word and print results with deep links.

JSON goes to stdout (pipe-friendly), a short human summary to stderr.
"""

import asyncio
import json
import sys
from typing import Any, Dict, List, Optional

import click
from pydantic import ValidationError

from .core.logging import setup_logging
from .core.settings import settings
from .websearch.HTTPClient import HTTPClient, NetworkError, ProviderError
from .websearch.SearchManager import SearchManager
from .websearch.types import SearchParams

USAGE_HINT = 'Missing --q. Example: iwsearch --q "divine life" --phrase true'


def _flag(value: Optional[str]) -> Optional[bool]:
    return None if value is None else value == "true"


def format_result(result: Dict[str, Any], deep_url: Optional[str] = None) -> str:
    """Multi-line human summary of one output result."""
    title = result.get("t") or "(untitled)"
    url = result.get("url") or ""
    snippet = " ".join((result.get("txt") or "").split())
    crumbs = " > ".join(p["t"] for p in result.get("path") or [] if p.get("t"))
    lines = [
        f"Title: {title}",
        f"Path: {crumbs}" if crumbs else None,
        f"URL: {settings.base_url}{url}" if url else None,
        f"Deep URL: {deep_url}" if deep_url else None,
        f"Snippet: {snippet}" if snippet else None,
    ]
    return "\n".join(line for line in lines if line)


def print_summary(output: Dict[str, Any]) -> None:
    results: List[Dict[str, Any]] = output["results"]
    total = output["total"] if output["total"] is not None else "?"
    click.echo(f"Found {len(results)} results (total: {total}).", err=True)
    if not results:
        return
    click.echo("\nTop results:\n", err=True)
    for i, (result, citation) in enumerate(
        zip(results[: settings.summary_max_results], output["citations"]), 1
    ):
        click.echo(f"--- {i} ---", err=True)
        click.echo(format_result(result, citation.get("deepUrl")), err=True)
        click.echo("", err=True)


async def run_search(params: SearchParams) -> Dict[str, Any]:
    async with HTTPClient() as client:
        return await SearchManager(client).run(params)


@click.command()
@click.option("--q", "q", default="", help="Free-text query")
@click.option("--page", type=int, default=1, help="Result page (1-based)")
@click.option("--auth", default=None, help="Author filter: sa | m | any")
@click.option("--comp", default=None, help="Compilation filter: cwsa | sabcl | arya | cwm | agenda | any")
@click.option("--vol", default=None, help="Volume filter")
@click.option("--phrase", default=None, help="Exact phrase search (true/false)")
@click.option("--anyTerm", "any_term", default=None, help="Match any term (true/false)")
@click.option("--searched", default=None, help="Scope: volumes | compilations | reference | conversation")
@click.option("--priorityIndex", "priority_index", default=None, help="Use the priority index (true/false)")
@click.option("--sortby", default=None, help="Sort order, e.g. scoreDesc")
@click.option("--stripHtml", "strip_html", default=None, help="Strip markup from snippets (true/false)")
@click.option("--maxSnippet", "max_snippet", type=int, default=None, help="Truncate snippets to N characters")
@click.option("--deepLink", "deep_link", default="none", help="Deep links: none | search | paragraph | both")
def main(
    q: str,
    page: int,
    auth: Optional[str],
    comp: Optional[str],
    vol: Optional[str],
    phrase: Optional[str],
    any_term: Optional[str],
    searched: Optional[str],
    priority_index: Optional[str],
    sortby: Optional[str],
    strip_html: Optional[str],
    max_snippet: Optional[int],
    deep_link: str,
) -> None:
    """Search the Incarnate Word corpus."""
    setup_logging(settings.log_level, settings.enable_console_logging)

    if not q:
        click.echo(USAGE_HINT, err=True)
        sys.exit(1)

    try:
        params = SearchParams(
            q=q,
            page=page,
            auth=auth,
            comp=comp,
            vol=vol,
            phrase=_flag(phrase),
            anyTerm=_flag(any_term),
            searched=searched,
            priorityIndex=_flag(priority_index),
            sortby=sortby,
            stripHtml=_flag(strip_html),
            maxSnippet=max_snippet or None,
            deepLink=deep_link,
        )
    except ValidationError as e:
        click.echo(f"Invalid arguments:\n{e}", err=True)
        sys.exit(1)

    try:
        output = asyncio.run(run_search(params))
    except (ProviderError, NetworkError) as e:
        click.echo(f"Request failed: {e}", err=True)
        sys.exit(1)

    print_summary(output)
    click.echo(json.dumps(output, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
