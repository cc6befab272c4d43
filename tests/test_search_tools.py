import httpx
import pytest

from websearch_mcp.errors import NetworkError, ParseError, SearchError
from websearch_mcp.search.tools import SearchResponse, SearchResult, format_results


def test_search_parses_instant_answer_and_related_topics(ddg_tools):
    response = ddg_tools.search("python")

    assert response.query == "python"
    assert response.has_instant_answer
    assert [r.title for r in response.results] == [
        "Python (programming language)",
        "Python Software Foundation",
        "CPython",
        "Jython",
        "Monty Python",
    ]
    assert response.results[0].url == "https://en.wikipedia.org/wiki/Python_(programming_language)"
    assert response.results[1].snippet == "An organization devoted to the Python language."
    assert response.results[1].url == "https://duckduckgo.com/Python_Software_Foundation"


def test_search_respects_limit_including_instant_answer(ddg_tools):
    response = ddg_tools.search("python", 3)
    assert [r.title for r in response.results] == [
        "Python (programming language)",
        "Python Software Foundation",
        "CPython",
    ]


@pytest.mark.parametrize("requested, expected", [(None, 5), (0, 1), (-4, 1), (3, 3), (50, 10)])
def test_effective_limit_is_clamped(ddg_tools, requested, expected):
    assert ddg_tools.effective_limit(requested) == expected


def test_search_sends_query_params_and_user_agent(make_tools):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        seen["ua"] = request.headers["user-agent"]
        return httpx.Response(200, json={"RelatedTopics": []})

    make_tools(handler).search("open source")
    assert seen["params"] == {"q": "open source", "format": "json", "no_html": "1"}
    assert seen["ua"] == "MCP-Server/1.0"


def test_empty_provider_answer_returns_empty_results(make_tools):
    tools = make_tools(lambda request: httpx.Response(200, json={"Abstract": "", "RelatedTopics": []}))
    response = tools.search("zxqv")
    assert response.results == []
    assert not response.has_instant_answer
    assert "No direct results found" in format_results(response)


def test_timeout_surfaces_as_network_error(make_tools):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    tools = make_tools(handler)
    with pytest.raises(NetworkError) as exc:
        tools.search("python")
    assert isinstance(exc.value.__cause__, httpx.ReadTimeout)
    assert exc.value.status_code is None
    assert len(tools.history) == 0


def test_connection_error_surfaces_as_network_error(make_tools):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkError):
        make_tools(handler).search("python")


def test_non_2xx_surfaces_as_network_error_with_status(make_tools):
    tools = make_tools(lambda request: httpx.Response(503, text="unavailable"))
    with pytest.raises(NetworkError) as exc:
        tools.search("python")
    assert exc.value.status_code == 503
    assert "503" in str(exc.value)


def test_malformed_json_surfaces_as_parse_error(make_tools):
    tools = make_tools(lambda request: httpx.Response(200, text="<html>not json</html>"))
    with pytest.raises(ParseError) as exc:
        tools.search("python")
    assert isinstance(exc.value, SearchError)
    assert exc.value.__cause__ is not None


@pytest.mark.parametrize("payload", [[1, 2, 3], {"RelatedTopics": "nope"}])
def test_unexpected_json_shape_surfaces_as_parse_error(make_tools, payload):
    tools = make_tools(lambda request: httpx.Response(200, json=payload))
    with pytest.raises(ParseError):
        tools.search("python")


def test_successful_search_is_recorded_in_history(ddg_tools):
    ddg_tools.search("first")
    ddg_tools.search("second")
    entries = ddg_tools.history.entries()
    assert len(entries) == 2
    assert entries[0].endswith("] first")
    assert entries[1].endswith("] second")


def test_format_results_numbers_related_after_instant_answer():
    response = SearchResponse(
        query="python",
        results=[
            SearchResult(title="Python", url="https://example.org/python", snippet="A language."),
            SearchResult(title="CPython", url="https://example.org/cpython", snippet="Reference impl."),
        ],
        has_instant_answer=True,
    )
    text = format_results(response)
    assert text.startswith("# Web Search Results for: python\n")
    assert "## Instant Answer\nA language.\nSource: https://example.org/python" in text
    assert "## Related Results" in text
    assert "### Result 2: CPython\nReference impl.\nURL: https://example.org/cpython" in text
    assert "No direct results found" not in text
