"""CLI Client for the web search tool
Runs searches locally, without an MCP host, and renders the same Markdown the tool returns.
"""
from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.prompt import Prompt

from websearch_mcp.errors import WebSearchMCPError
from websearch_mcp.search.tools import SearchTools, format_results
from websearch_mcp.utils.config import load_settings
from websearch_mcp.utils.logger import get_logger


class SearchCLIClient:
    def __init__(self, tools: SearchTools | None = None, console: Console | None = None):
        self.console = console or Console()
        self.logger = get_logger("search_cli")
        self.tools = tools or SearchTools(load_settings())

    def run_single_query(self, query: str, num_results: int | None = None, as_json: bool = False) -> str:
        with self.console.status("[bold green]Searching..."):
            response = self.tools.search(query, num_results)
        if as_json:
            out = json.dumps([asdict(r) for r in response.results], indent=2, ensure_ascii=False)
            self.console.print_json(out)
            return out
        md = format_results(response)
        self.console.print(Markdown(md))
        return md

    def run_interactive(self, num_results: int | None = None):
        self.console.print(Panel.fit(
            "[bold blue]Web Search MCP - Interactive CLI[/bold blue]\n"
            "Type a query to search, or 'exit' to quit.",
            border_style="blue",
        ))
        while True:
            try:
                query = Prompt.ask("\n[bold green]search>[/bold green]").strip()
            except (KeyboardInterrupt, EOFError):
                self.console.print("\n[yellow]Session interrupted by user[/yellow]")
                break
            if not query:
                continue
            if query.lower() in ("exit", "quit", "q"):
                break
            try:
                self.run_single_query(query, num_results)
            except WebSearchMCPError as e:
                self.console.print(f"[red]Error: {e}[/red]")
                self.logger.error(f"CLI error: {e}")

    def close(self):
        self.tools.close()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Web Search MCP - local search client")
    parser.add_argument("query", nargs="?", help="Search query (if not provided, enters interactive mode)")
    parser.add_argument("-n", "--num-results", type=int, default=None, help="Number of results (max 10)")
    parser.add_argument("--json", action="store_true", help="Print raw results as JSON")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None):
    args = parse_args(argv)
    client = SearchCLIClient()
    try:
        if args.query:
            try:
                client.run_single_query(args.query, args.num_results, as_json=args.json)
            except WebSearchMCPError as e:
                print(f"Error: {e}", file=sys.stderr)
                sys.exit(1)
        else:
            client.run_interactive(args.num_results)
    finally:
        client.close()


if __name__ == "__main__":
    main()
