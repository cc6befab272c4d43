"""MCP prompts: research and fact-check templates built around the websearch tool."""
from __future__ import annotations

from typing import Dict, List, Optional

import mcp.types as types

from websearch_mcp.errors import ProtocolError
from websearch_mcp.utils.logger import get_logger


DEPTHS = ("quick", "standard", "comprehensive")

logger = get_logger("prompts_mcp")


def list_prompts() -> List[types.Prompt]:
    return [
        types.Prompt(
            name="research",
            description="Generate a research prompt for investigating a topic using web search",
            arguments=[
                types.PromptArgument(name="topic", description="The topic to research", required=True),
                types.PromptArgument(
                    name="depth",
                    description="Research depth: 'quick', 'standard', or 'comprehensive'",
                    required=False,
                ),
            ],
        ),
        types.Prompt(
            name="fact-check",
            description="Generate a fact-checking prompt to verify claims using web search",
            arguments=[
                types.PromptArgument(
                    name="claim", description="The claim or statement to fact-check", required=True
                ),
            ],
        ),
    ]


def _message(role: str, text: str) -> types.PromptMessage:
    return types.PromptMessage(role=role, content=types.TextContent(type="text", text=text))


def get_prompt(name: str, arguments: Optional[Dict[str, str]]) -> types.GetPromptResult:
    arguments = arguments or {}
    logger.info(f"Getting prompt: {name} with arguments: {arguments}")
    if name == "research":
        return research_prompt(arguments)
    if name == "fact-check":
        return fact_check_prompt(arguments)
    raise ProtocolError(f"Unknown prompt: {name}")


def research_prompt(arguments: Dict[str, str]) -> types.GetPromptResult:
    topic = (arguments.get("topic") or "").strip()
    if not topic:
        raise ProtocolError("Missing required 'topic' argument")
    depth = (arguments.get("depth") or "standard").strip().lower()
    if depth not in DEPTHS:
        depth = "standard"

    system = "You are a research assistant with web search capabilities. "
    if depth == "quick":
        system += "Provide a brief overview with 2-3 key points from search results."
    elif depth == "comprehensive":
        system += (
            "Conduct thorough research with multiple searches, cross-reference sources, "
            "and provide detailed analysis with citations."
        )
    else:
        system += "Search for relevant information and summarize key findings with sources."

    user = f"Please research the following topic: {topic}\n\n"
    if depth == "quick":
        user += "I need a quick summary. Focus on the most important points."
    elif depth == "comprehensive":
        user += (
            "Please conduct comprehensive research including:\n"
            "1. Background and context\n"
            "2. Current state and recent developments\n"
            "3. Key perspectives and debates\n"
            "4. Reliable sources and citations\n"
            "5. Summary and key takeaways"
        )
    else:
        user += "Please provide a balanced overview with key facts and sources."

    ack = (
        f'I\'ll help you research "{topic}" using web search. '
        f"I'll conduct a {depth} investigation and provide you with comprehensive findings."
    )
    return types.GetPromptResult(
        description=f"Research prompt for: {topic} (depth: {depth})",
        messages=[_message("user", system), _message("assistant", ack), _message("user", user)],
    )


def fact_check_prompt(arguments: Dict[str, str]) -> types.GetPromptResult:
    claim = (arguments.get("claim") or "").strip()
    if not claim:
        raise ProtocolError("Missing required 'claim' argument")

    return types.GetPromptResult(
        description="Fact-check prompt for claim verification",
        messages=[
            _message(
                "user",
                "You are a fact-checker with web search capabilities. Your job is to verify claims "
                "by searching for reliable sources and evidence. Always cite your sources and "
                "rate the claim as: TRUE, FALSE, PARTIALLY TRUE, or UNVERIFIABLE.",
            ),
            _message(
                "assistant",
                "I'll fact-check the claim by searching for reliable sources and evidence. "
                "I'll provide a clear verdict with supporting sources.",
            ),
            _message(
                "user",
                f'Please fact-check the following claim:\n\n"{claim}"\n\n'
                "Search for evidence both supporting and contradicting this claim, "
                "then provide your assessment.",
            ),
        ],
    )
