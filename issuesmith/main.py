#!/usr/bin/env python3
"""
IssueSmith - AI tools for turning GitHub issues into commits.

This is the command-line entry point: it lists the registered tools,
checks configuration, and invokes a single tool with a JSON payload.
"""

import argparse
import json
import logging
import os
import sys

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import config
from .exceptions import IssueSmithError
from .github_api import GitHubAPI
from .tools import TOOLS, invoke_tool

logger = logging.getLogger(__name__)


def setup_argument_parser() -> argparse.ArgumentParser:
    """Set up command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="issuesmith",
        description="IssueSmith - AI tools for GitHub issues and repositories",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --list-tools
  %(prog)s get-github-issues --input '{"repoURL": "https://github.com/acme/widgets"}'
  %(prog)s write-code --input-file request.json --json
  %(prog)s --config-test

Environment Variables:
  GITHUB_TOKEN     - GitHub personal access token (required for writes)
  GROQ_API_KEY     - Groq API key (required for write-code and validate-idea)
  MODEL_NAME       - Completion model (default: llama-3.3-70b-versatile)
  LOG_LEVEL        - Logging level (default: INFO)
        """,
    )

    parser.add_argument("tool", nargs="?", help="Id of the tool to invoke")

    source = parser.add_mutually_exclusive_group()
    source.add_argument("--input", help="Tool input as a JSON object")
    source.add_argument("--input-file", help="Path to a file holding the tool input as JSON")

    parser.add_argument("--json", action="store_true", help="Also print the result data as JSON")

    parser.add_argument("--list-tools", action="store_true", help="List available tools and exit")

    parser.add_argument("--config-test", action="store_true", help="Test configuration and exit")

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Set logging level (default: LOG_LEVEL or INFO)",
    )

    return parser


def list_tools(console: Console) -> None:
    """Print the registered tools."""
    table = Table(title="Available Tools")
    table.add_column("Id", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Description")

    for tool in TOOLS:
        table.add_row(tool.id, tool.name, tool.description)

    console.print(table)


def check_configuration(console: Console) -> bool:
    """Test configuration and GitHub connectivity."""
    console.print("[bold cyan]Testing Configuration...[/bold cyan]")

    table = Table(title="Configuration Status")
    table.add_column("Setting", style="cyan")
    table.add_column("Status", style="green")
    table.add_column("Value", style="yellow")

    table.add_row(
        "GitHub Token",
        "✓ Set" if config.github_token else "✗ Missing",
        "***" if config.github_token else "Not set",
    )
    table.add_row(
        "Groq API Key",
        "✓ Set" if config.groq_api_key else "✗ Missing",
        "***" if config.groq_api_key else "Not set",
    )
    table.add_row("Model Name", "✓ Set", config.model_name)
    table.add_row("Log Level", "✓ Set", config.log_level)

    console.print(table)

    if not all([config.github_token, config.groq_api_key]):
        console.print("[red]❌ Configuration incomplete. Please check your environment variables.[/red]")
        return False

    console.print("\n[bold cyan]Testing GitHub API Connection...[/bold cyan]")
    github = GitHubAPI.from_config()
    try:
        user_data = github.make_request("GET", f"{github.base_url}/user").json()
        console.print("[green]✓ GitHub API connection successful[/green]")
        console.print(f"[green]✓ Authenticated as: {user_data.get('login', 'Unknown')}[/green]")
    except IssueSmithError as e:
        console.print(f"[red]❌ GitHub API connection failed: {str(e)}[/red]")
        return False
    finally:
        github.close()

    return True


def load_payload(args: argparse.Namespace) -> dict:
    """Read the tool input from --input or --input-file."""
    if args.input_file:
        with open(args.input_file, "r", encoding="utf-8") as f:
            raw = f.read()
    else:
        raw = args.input or "{}"

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Tool input is not valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise ValueError("Tool input must be a JSON object")
    return payload


def main(argv=None):
    """Main entry point for the application."""
    parser = setup_argument_parser()
    args = parser.parse_args(argv)
    console = Console()

    if args.log_level:
        os.environ["LOG_LEVEL"] = args.log_level
    config.setup_logging()

    if args.list_tools:
        list_tools(console)
        return 0

    if args.config_test:
        return 0 if check_configuration(console) else 1

    if not args.tool:
        parser.print_help()
        return 2

    try:
        result = invoke_tool(args.tool, load_payload(args))
    except (IssueSmithError, ValueError, OSError) as e:
        logger.error(f"Application error: {str(e)}")
        console.print(f"Error: {str(e)}", style="red", markup=False)
        return 1

    console.print(result.text, markup=False)
    if result.ui:
        console.print(Panel(Text(result.ui.content), title=f"[bold cyan]{result.ui.title}[/bold cyan]"))
    if args.json:
        console.print_json(json.dumps(result.data))
    return 0


if __name__ == "__main__":
    sys.exit(main())
