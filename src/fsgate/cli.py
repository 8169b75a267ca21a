"""Command-line interface for fsgate.

This Click-based CLI is a thin host around the tool layer in
:mod:`fsgate.mcp_tools`: every command invokes one tool, prints its result
and exits with status 1 when the tool reports an error.

Examples
--------
$ fsgate ls ~/projects
$ fsgate tree . --max-depth 1
$ fsgate search ~/notes todo
$ fsgate registry search "weather rust"
"""

import json
import logging
import sys
from typing import Any, Dict, Optional

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from fsgate.mcp_tools import get_available_tools, invoke_tool
from fsgate.registry import load_registry, new_component_uris
from fsgate.utils.config_manager import get_config
from fsgate.utils.exceptions import FsGateError
from fsgate.utils.logger_setup import setup_logging

logger = logging.getLogger(__name__)


def _emit(ctx: click.Context, outcome: Dict[str, Any]) -> Any:
    """Exit 1 with the error text on failure, otherwise hand back the result."""
    if not outcome["success"]:
        click.echo(outcome["error"], err=True)
        ctx.exit(1)
    return outcome["result"]


def _echo_text(text: str) -> None:
    click.echo(text, nl=not text.endswith("\n"))


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log at DEBUG level to the console.")
@click.option("--log-level", default=None, help="Override the configured log level.")
def cli(verbose: bool, log_level: Optional[str]) -> None:
    """Filesystem operations and component registry lookup."""
    load_dotenv()
    level = "DEBUG" if verbose else log_level
    if verbose and not get_config().logging.enable_structured_logging:
        setup_logging(level=level, console_handler=RichHandler(rich_tracebacks=True))
    else:
        setup_logging(level=level)


@cli.command("ls")
@click.argument("path")
@click.pass_context
def ls_command(ctx: click.Context, path: str) -> None:
    """List a directory."""
    lines = _emit(ctx, invoke_tool("list-directory", {"path": path}))
    click.echo("".join(lines), nl=False)


@cli.command("cat")
@click.argument("path")
@click.pass_context
def cat_command(ctx: click.Context, path: str) -> None:
    """Print a file."""
    click.echo(_emit(ctx, invoke_tool("read-file", {"path": path})), nl=False)


@cli.command("write")
@click.argument("path")
@click.argument("content")
@click.pass_context
def write_command(ctx: click.Context, path: str, content: str) -> None:
    """Write CONTENT to PATH ("-" reads the content from stdin)."""
    if content == "-":
        content = click.get_text_stream("stdin").read()
    click.echo(_emit(ctx, invoke_tool("write-file", {"path": path, "content": content})))


@cli.command("mkdir")
@click.argument("path")
@click.pass_context
def mkdir_command(ctx: click.Context, path: str) -> None:
    """Create a directory and its parents."""
    click.echo(_emit(ctx, invoke_tool("create-directory", {"path": path})))


@cli.command("mv")
@click.argument("source")
@click.argument("destination")
@click.pass_context
def mv_command(ctx: click.Context, source: str, destination: str) -> None:
    """Move or rename SOURCE to DESTINATION."""
    click.echo(_emit(ctx, invoke_tool("move-path", {"source": source, "destination": destination})))


@cli.command("rm")
@click.argument("path")
@click.pass_context
def rm_command(ctx: click.Context, path: str) -> None:
    """Delete a file."""
    click.echo(_emit(ctx, invoke_tool("delete-file", {"path": path})))


@cli.command("rmdir")
@click.argument("path")
@click.pass_context
def rmdir_command(ctx: click.Context, path: str) -> None:
    """Delete an empty directory."""
    click.echo(_emit(ctx, invoke_tool("delete-directory", {"path": path})))


@cli.command("exists")
@click.argument("path")
@click.pass_context
def exists_command(ctx: click.Context, path: str) -> None:
    """Print true or false depending on whether PATH exists."""
    exists = _emit(ctx, invoke_tool("file-exists", {"path": path}))
    click.echo("true" if exists else "false")


@cli.command("tree")
@click.argument("path")
@click.option("--max-depth", type=click.IntRange(min=0), default=None,
              help="Deepest level to show (0 = immediate children). Defaults to the configured depth.")
@click.pass_context
def tree_command(ctx: click.Context, path: str, max_depth: Optional[int]) -> None:
    """Show a directory tree."""
    tree = _emit(ctx, invoke_tool("get-directory-tree", {"path": path, "max_depth": max_depth}))
    click.echo(tree, nl=False)


@cli.command("search")
@click.argument("path")
@click.argument("pattern")
@click.pass_context
def search_command(ctx: click.Context, path: str, pattern: str) -> None:
    """Find names under PATH containing PATTERN (case-insensitive)."""
    _echo_text(_emit(ctx, invoke_tool("search-file", {"path": path, "pattern": pattern})))


@cli.command("info")
@click.argument("path")
@click.pass_context
def info_command(ctx: click.Context, path: str) -> None:
    """Show metadata for PATH."""
    _echo_text(_emit(ctx, invoke_tool("get-file-info", {"path": path})))


@cli.command("tools")
@click.option("--json", "as_json", is_flag=True, help="Print the tool list as JSON.")
def tools_command(as_json: bool) -> None:
    """List the available tools."""
    tools = get_available_tools()
    if as_json:
        click.echo(json.dumps(tools, indent=2))
        return

    table = Table(title="fsgate tools")
    table.add_column("Tool")
    table.add_column("Category")
    table.add_column("Parameters")
    table.add_column("Description")
    for tool in tools:
        params = ", ".join(
            name if spec["required"] else f"[{name}]" for name, spec in tool["parameters"].items()
        )
        table.add_row(tool["name"], tool["category"], params, tool["description"])
    Console().print(table)


# ============================================================================
# Registry commands
# ============================================================================

@cli.group("registry")
def registry_group() -> None:
    """Search and inspect the component registry."""


@registry_group.command("search")
@click.argument("query", required=False)
@click.option("--registry", "registry_file", default=None, help="Registry JSON file (defaults to the configured one).")
@click.option("--json", "as_json", is_flag=True, help="Print matches as JSON.")
@click.pass_context
def registry_search_command(ctx: click.Context, query: Optional[str], registry_file: Optional[str], as_json: bool) -> None:
    """Search components; any QUERY term may match name, description or URI."""
    components = _emit(ctx, invoke_tool("search-components", {"query": query, "registry_file": registry_file}))
    if as_json:
        click.echo(json.dumps(components, indent=2))
        return

    table = Table(title=f"{len(components)} component(s)")
    table.add_column("Name")
    table.add_column("URI")
    table.add_column("Description")
    for component in components:
        table.add_row(component["name"], component["uri"], component["description"])
    Console().print(table)


@registry_group.command("show")
@click.argument("name_or_uri")
@click.option("--registry", "registry_file", default=None, help="Registry JSON file (defaults to the configured one).")
@click.pass_context
def registry_show_command(ctx: click.Context, name_or_uri: str, registry_file: Optional[str]) -> None:
    """Show one component by name (any case) or exact URI."""
    component = _emit(ctx, invoke_tool("get-component", {"name_or_uri": name_or_uri, "registry_file": registry_file}))
    click.echo(json.dumps(component, indent=2))


@registry_group.command("diff")
@click.argument("current")
@click.argument("baseline")
@click.pass_context
def registry_diff_command(ctx: click.Context, current: str, baseline: str) -> None:
    """List URIs in CURRENT that are not in BASELINE (new or changed entries)."""
    try:
        uris = new_component_uris(load_registry(current), load_registry(baseline))
    except FsGateError as e:
        click.echo(str(e), err=True)
        ctx.exit(1)

    if not uris:
        click.echo("No new or modified components found.")
        return
    for uri in uris:
        click.echo(uri)


def main() -> None:
    cli(prog_name="fsgate")


if __name__ == "__main__":
    sys.exit(main())
