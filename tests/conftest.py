import httpx
import pytest

from websearch_mcp.search.history import SearchHistory
from websearch_mcp.search.tools import SearchTools
from websearch_mcp.utils.config import Settings


DDG_PAYLOAD = {
    "Heading": "Python (programming language)",
    "Abstract": "Python is a high-level, general-purpose programming language.",
    "AbstractURL": "https://en.wikipedia.org/wiki/Python_(programming_language)",
    "RelatedTopics": [
        {
            "Text": "Python Software Foundation An organization devoted to the Python language.",
            "FirstURL": "https://duckduckgo.com/Python_Software_Foundation",
        },
        {"Text": "", "FirstURL": "https://duckduckgo.com/Empty"},
        {
            "Name": "See also",
            "Topics": [
                {"Text": "CPython The reference implementation of Python.", "FirstURL": "https://duckduckgo.com/CPython"},
                {"Text": "Jython Python on the JVM.", "FirstURL": "https://duckduckgo.com/Jython"},
            ],
        },
        {"Text": "Monty Python British comedy group.", "FirstURL": "https://duckduckgo.com/Monty_Python"},
    ],
}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        server_name="websearch-mcp-test",
        server_version="1.0.0",
        search_api_url="https://api.duckduckgo.com/",
        default_results=5,
        max_results=10,
        request_timeout=5,
        user_agent="MCP-Server/1.0",
        history_limit=100,
        transport="stdio",
        host="127.0.0.1",
        port=8000,
    )


@pytest.fixture
def make_tools(settings):
    """Build SearchTools whose HTTP calls are answered by `handler`."""
    created = []

    def _make(handler) -> SearchTools:
        client = httpx.Client(
            transport=httpx.MockTransport(handler),
            headers={"User-Agent": settings.user_agent},
        )
        tools = SearchTools(settings, history=SearchHistory(settings.history_limit), client=client)
        created.append(tools)
        return tools

    yield _make
    for tools in created:
        tools.close()


@pytest.fixture
def ddg_tools(make_tools):
    return make_tools(lambda request: httpx.Response(200, json=DDG_PAYLOAD))
