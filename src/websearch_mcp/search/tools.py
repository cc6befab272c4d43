from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional
from urllib.parse import unquote, urlparse

import httpx

from websearch_mcp.errors import NetworkError, ParseError
from websearch_mcp.utils.logger import get_logger
from websearch_mcp.utils.config import Settings
from .history import SearchHistory


@dataclass
class SearchResult:
    title: str
    url: str
    snippet: str


@dataclass
class SearchResponse:
    query: str
    results: List[SearchResult] = field(default_factory=list)
    # True when results[0] is the provider's instant answer
    has_instant_answer: bool = False


class SearchTools:
    """Core search functionality behind the websearch MCP tool"""

    def __init__(
        self,
        settings: Settings,
        history: SearchHistory | None = None,
        client: httpx.Client | None = None,
    ):
        self.settings = settings
        self.logger = get_logger("search_mcp")
        self.history = history if history is not None else SearchHistory(settings.history_limit)
        self.client = client or httpx.Client(
            timeout=httpx.Timeout(settings.request_timeout),
            follow_redirects=True,
            headers={"User-Agent": settings.user_agent},
        )

    def close(self) -> None:
        self.client.close()

    def effective_limit(self, num_results: Optional[int]) -> int:
        if num_results is None:
            return self.settings.default_results
        return max(1, min(num_results, self.settings.max_results))

    def search(self, query: str, num_results: Optional[int] = None) -> SearchResponse:
        """Run one provider query and return normalized results.

        Raises NetworkError on transport failures, timeouts and non-2xx
        responses, and ParseError when the body is not a JSON object.
        """
        limit = self.effective_limit(num_results)
        self.logger.debug(f"Searching for: {query} (max {limit} results)")

        body = self._request(query)
        response = self._parse(query, body, limit)

        self.history.add(query)
        self.logger.info(f"Search returned {len(response.results)} results")
        return response

    def _request(self, query: str) -> str:
        params = {"q": query, "format": "json", "no_html": "1"}
        try:
            resp = self.client.get(self.settings.search_api_url, params=params)
        except httpx.HTTPError as e:
            self.logger.warning(f"Search request failed: {e!r}")
            raise NetworkError(f"Search request failed: {e}") from e

        if not resp.is_success:
            raise NetworkError(
                f"Search request failed with status: {resp.status_code}",
                status_code=resp.status_code,
            )
        return resp.text

    def _parse(self, query: str, body: str, limit: int) -> SearchResponse:
        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            self.logger.warning(f"Failed to parse search results: {e}")
            raise ParseError(f"Malformed provider response: {e.msg} (preview: {body[:200]!r})") from e
        if not isinstance(data, dict):
            raise ParseError(f"Malformed provider response: expected a JSON object, got {type(data).__name__}")

        response = SearchResponse(query=query)

        abstract = _text(data.get("Abstract")) or _text(data.get("AbstractText"))
        if abstract:
            response.results.append(
                SearchResult(
                    title=_text(data.get("Heading")) or query,
                    url=_text(data.get("AbstractURL")),
                    snippet=abstract,
                )
            )
            response.has_instant_answer = True

        topics = data.get("RelatedTopics") or []
        if not isinstance(topics, list):
            raise ParseError("Malformed provider response: RelatedTopics is not a list")

        for topic in _flatten_topics(topics):
            if len(response.results) >= limit:
                break
            text = _text(topic.get("Text"))
            if not text:
                continue
            url = _text(topic.get("FirstURL"))
            title, snippet = _split_title(text, url)
            response.results.append(SearchResult(title=title, url=url, snippet=snippet))

        del response.results[limit:]
        return response


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _flatten_topics(topics: List[Any]) -> Iterator[Dict[str, Any]]:
    """Yield result topics in document order, expanding category groups."""
    for topic in topics:
        if not isinstance(topic, dict):
            continue
        if isinstance(topic.get("Topics"), list):
            yield from _flatten_topics(topic["Topics"])
        else:
            yield topic


def _split_title(text: str, url: str) -> tuple[str, str]:
    """Derive a title from the topic URL slug, e.g. /Python_(programming_language)."""
    slug = unquote(urlparse(url).path.rstrip("/").rsplit("/", 1)[-1]).replace("_", " ").strip() if url else ""
    if slug and text.startswith(slug):
        rest = text[len(slug):].lstrip(" -:,")
        return slug, rest or text
    if slug:
        return slug, text
    title = text if len(text) <= 80 else text[:77] + "..."
    return title, text


def format_results(response: SearchResponse) -> str:
    """Render a SearchResponse as the Markdown text returned to the MCP host."""
    lines = [f"# Web Search Results for: {response.query}", ""]

    results = list(response.results)
    if response.has_instant_answer and results:
        answer = results.pop(0)
        lines.append("## Instant Answer")
        lines.append(answer.snippet)
        if answer.url:
            lines.append(f"Source: {answer.url}")
        lines.append("")

    if results:
        lines.append("## Related Results")
        lines.append("")
        offset = 2 if response.has_instant_answer else 1
        for i, r in enumerate(results, start=offset):
            lines.append(f"### Result {i}: {r.title}")
            lines.append(r.snippet)
            if r.url:
                lines.append(f"URL: {r.url}")
            lines.append("")

    if not response.results:
        lines.append("No direct results found. Try refining your search query.")

    return "\n".join(lines).rstrip() + "\n"
