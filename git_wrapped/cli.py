import asyncio
import logging
import os
from datetime import date
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from git_wrapped.analyzers.stats_aggregator import build_wrapped_stats
from git_wrapped.fetchers.github import GitHubError, GitHubFetcher
from git_wrapped.formatters.html import format_html
from git_wrapped.formatters.json_format import format_json
from git_wrapped.formatters.markdown import format_report
from git_wrapped.formatters.terminal import format_terminal
from git_wrapped.models import WrappedStats

load_dotenv()
app = typer.Typer()
console = Console()

FORMATTERS = {
    "terminal": format_terminal,
    "markdown": format_report,
    "json": format_json,
    "html": format_html,
}


async def collect_stats(
    token: Optional[str], user: Optional[str], year: int, repo: Optional[str], compare: bool
) -> WrappedStats:
    """Fetch the target year (and optionally the year before) and aggregate."""
    async with GitHubFetcher(token=token) as github:
        # the current year goes first so a bad user or token fails before the comparison fetch
        snapshot = await github.fetch_snapshot(user, year, repo)
        previous_snapshot = await github.fetch_previous_snapshot(snapshot.username, year, repo) if compare else None

    previous = build_wrapped_stats(previous_snapshot) if previous_snapshot is not None else None
    return build_wrapped_stats(snapshot, previous=previous)


@app.command()
def wrapped(
    user: Optional[str] = typer.Option(None, "--user", "-u", help="GitHub username (default: authenticated user)"),
    year: int = typer.Option(date.today().year, "--year", "-y", help="Year to analyze"),
    repo: Optional[str] = typer.Option(None, "--repo", "-r", help="Analyze a single repository (owner/repo)"),
    fmt: str = typer.Option("terminal", "--format", "-f", help="terminal, markdown, json or html"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Save report to file instead of printing"),
    token: Optional[str] = typer.Option(None, "--token", "-t", help="GitHub token (or set GITHUB_TOKEN)"),
    compare: bool = typer.Option(True, "--compare/--no-compare", help="Compare with the previous year"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    formatter = FORMATTERS.get(fmt)
    if formatter is None:
        console.print(f"[bold red]Error:[/] --format must be one of {', '.join(FORMATTERS)}, got '{fmt}'")
        raise typer.Exit(1)

    token = token or os.getenv("GITHUB_TOKEN")
    if not token and not user:
        console.print("[bold red]No GitHub token found.[/]")
        console.print("Set GITHUB_TOKEN, pass --token, or analyze a public user with --user.")
        raise typer.Exit(1)

    try:
        with console.status("[bold green]Fetching your GitHub data..."):
            stats = asyncio.run(collect_stats(token, user, year, repo, compare))
    except GitHubError as e:
        console.print(f"[bold red]Error:[/] {e}")
        raise typer.Exit(1)

    console.print(f"[bold green]✓[/] Found {stats.total_commits} commits in {stats.year}")
    if fmt == "terminal":
        # plain text when saved or piped
        rendered = format_terminal(stats, width=console.width, color=console.is_terminal and not output)
    else:
        rendered = formatter(stats)

    if output:
        output.write_text(rendered, encoding="utf-8")
        console.print(f"[bold green]✓[/] Report saved to [cyan]{output}[/]")
        if fmt == "html":
            console.print(f"[dim]  Open in browser: open {output}[/]")
    elif fmt == "terminal":
        console.file.write(rendered)
    else:
        console.print(rendered, markup=False, highlight=False, soft_wrap=True)


if __name__ == "__main__":
    app()
