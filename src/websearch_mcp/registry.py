"""Tool registry: maps a tool name to its input schema and handler."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import mcp.types as types
from pydantic import BaseModel, Field, ValidationError

from websearch_mcp.errors import ProtocolError
from websearch_mcp.search.tools import SearchTools, format_results
from websearch_mcp.utils.logger import get_logger


ToolHandler = Callable[[Dict[str, Any]], str]


@dataclass
class ToolDescriptor:
    name: str
    description: str
    input_schema: Dict[str, Any]
    handler: ToolHandler

    def to_mcp(self) -> types.Tool:
        return types.Tool(name=self.name, description=self.description, inputSchema=self.input_schema)


class ToolRegistry:
    def __init__(self):
        self.logger = get_logger("tool_registry")
        self._tools: Dict[str, ToolDescriptor] = {}

    def register(self, descriptor: ToolDescriptor) -> None:
        if descriptor.name in self._tools:
            raise ValueError(f"Tool already registered: {descriptor.name}")
        if not callable(descriptor.handler):
            raise TypeError(f"Handler must be callable: {descriptor.handler}")
        self._tools[descriptor.name] = descriptor
        self.logger.debug(f"Registered tool: {descriptor.name}")

    def get(self, name: str) -> ToolDescriptor:
        try:
            return self._tools[name]
        except KeyError:
            raise ProtocolError(f"Unknown tool: {name}") from None

    def list(self) -> List[ToolDescriptor]:
        return list(self._tools.values())

    def to_mcp_tools(self) -> List[types.Tool]:
        return [t.to_mcp() for t in self._tools.values()]

    def call(self, name: str, arguments: Optional[Dict[str, Any]]) -> str:
        descriptor = self.get(name)
        self.logger.info(f"Tool called: {name}")
        return descriptor.handler(arguments or {})


class WebSearchArgs(BaseModel):
    query: str = Field(..., min_length=1)
    numResults: Optional[int] = None


WEBSEARCH_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "query": {
            "type": "string",
            "description": "The search query to look up on the web",
        },
        "numResults": {
            "type": "integer",
            "description": "Number of search results to return (default: 5, max: 10)",
        },
    },
    "required": ["query"],
}


def parse_websearch_args(arguments: Dict[str, Any]) -> WebSearchArgs:
    if "query" not in arguments:
        raise ProtocolError("Missing required 'query' parameter")
    try:
        args = WebSearchArgs.model_validate(arguments)
    except ValidationError as e:
        problems = "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors())
        raise ProtocolError(f"Invalid websearch arguments: {problems}") from e
    if not args.query.strip():
        raise ProtocolError("Parameter 'query' must not be blank")
    return args


def build_registry(search_tools: SearchTools) -> ToolRegistry:
    def handle_websearch(arguments: Dict[str, Any]) -> str:
        args = parse_websearch_args(arguments)
        response = search_tools.search(args.query.strip(), args.numResults)
        return format_results(response)

    registry = ToolRegistry()
    registry.register(
        ToolDescriptor(
            name="websearch",
            description=(
                "Search the web for information on any topic. "
                "Returns relevant search results with titles, URLs, and snippets."
            ),
            input_schema=WEBSEARCH_SCHEMA,
            handler=handle_websearch,
        )
    )
    return registry
