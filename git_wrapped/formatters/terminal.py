import io

from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from git_wrapped.formatters.common import (
    addition_share,
    ascii_heatmap,
    comparison_message,
    format_change,
    format_day,
    format_hour,
    format_number,
    peak_hour_emoji,
    top_languages,
    top_repos,
)
from git_wrapped.models import PERSONALITIES, WrappedStats

SPARK_CHARS = "▁▂▃▄▅▆▇█"
LANGUAGE_COLORS = ["#f1e05a", "#3572A5", "#2b7489", "#b07219", "#563d7c"]


def _panel(body, title: str, color: str) -> Panel:
    return Panel(body, title=title, border_style=color, padding=(1, 2))


def _main_stats(stats: WrappedStats) -> Text:
    text = Text()
    for color, value, label in (
        ("green", format_number(stats.total_commits), "commits"),
        ("blue", format_number(stats.total_prs), "pull requests"),
        ("yellow", format_number(stats.total_issues), "issues"),
        ("magenta", format_number(stats.total_reviews), "reviews"),
        ("cyan", str(stats.repo_count), "repositories"),
    ):
        text.append("● ", style=color)
        text.append(value, style="bold")
        text.append(f" {label}\n")
    if stats.longest_streak > 0:
        text.append("\n🔥 Longest streak: ")
        text.append(str(stats.longest_streak), style="bold")
        text.append(" days")
        if stats.current_streak > 0:
            text.append(f"\n   Current streak: {stats.current_streak} days")
    return text


def _code_changes(stats: WrappedStats) -> Text:
    add_pct = addition_share(stats)
    width = 40
    add_width = round(add_pct / 100 * width)
    text = Text()
    text.append("+ ", style="green")
    text.append(f"{format_number(stats.total_additions)} lines added\n")
    text.append("- ", style="red")
    text.append(f"{format_number(stats.total_deletions)} lines deleted\n\n")
    text.append("█" * add_width, style="green")
    text.append("█" * (width - add_width), style="red")
    text.append(f"\n{add_pct}% additions / {100 - add_pct}% deletions", style="dim")
    return text


def _time_analysis(stats: WrappedStats) -> Text:
    text = Text()
    text.append("📅 Most productive day: ")
    text.append(stats.most_productive_day, style="bold")
    text.append("\n⏰ Peak coding hour: ")
    text.append(format_hour(stats.most_productive_hour), style="bold")
    text.append("\n\nHour distribution:\n", style="dim")
    max_hour = max(stats.commits_by_hour, default=0)
    for hour, count in enumerate(stats.commits_by_hour):
        normalized = count / max_hour if max_hour else 0
        char = SPARK_CHARS[min(int(normalized * 8), 7)]
        if hour == stats.most_productive_hour:
            style = "yellow"
        elif hour >= 22 or hour < 6:
            style = "blue"
        elif 9 <= hour < 17:
            style = "green"
        else:
            style = "cyan"
        text.append(char, style=style)
    text.append("\n12a 6a  12p 6p", style="dim")
    return text


def _languages(stats: WrappedStats):
    languages = top_languages(stats)
    if not languages:
        return Text("No language data available", style="dim")
    text = Text()
    for i, (lang, pct) in enumerate(languages):
        text.append("█" * max(1, round(pct * 30 / 100)), style=LANGUAGE_COLORS[i % len(LANGUAGE_COLORS)])
        text.append(f" {lang} ", style="bold")
        text.append(f"{pct}%\n", style="dim")
    return text


def _top_repos(stats: WrappedStats) -> Table:
    table = Table(show_header=False, box=None)
    medals = ["🥇", "🥈", "🥉", "  ", "  "]
    for medal, repo in zip(medals, top_repos(stats)):
        table.add_row(medal, Text(repo.name, style="bold"), Text(f"({repo.commits} commits)", style="dim"))
    return table


def _insights(stats: WrappedStats) -> Text:
    lines: list[str] = []
    if stats.biggest_day.commits > 0:
        lines.append(
            f"📈 Your most committed day was [bold]{format_day(stats.biggest_day.date)}[/] "
            f"with [bold]{stats.biggest_day.commits}[/] commits!"
        )
    if stats.biggest_deletion:
        lines.append(
            f"🧹 You mass-deleted [bold]{format_number(stats.biggest_deletion.lines)}[/] lines "
            f"on {format_day(stats.biggest_deletion.date)} (spring cleaning?)"
        )
    lines.append(
        f"{peak_hour_emoji(stats.most_productive_hour)} Peak coding hour: "
        f"[bold]{format_hour(stats.most_productive_hour)}[/]"
    )
    if stats.top_collaborator:
        lines.append(f"🤝 Most collaborated with: [bold]@{escape(stats.top_collaborator)}[/]")
    if stats.languages:
        lines.append(f"💝 Your top language: [bold]{escape(stats.top_language)}[/]")
    for fact in stats.fun_facts:
        lines.append(f"{fact.emoji} {escape(fact.text)}")
    return Text.from_markup("\n".join(lines))


def _comparison(stats: WrappedStats) -> Table:
    comp = stats.year_comparison
    table = Table("Metric", str(comp.previous_year), str(stats.year), "Change")
    for label, metric in (
        ("Commits", comp.commits), ("Pull Requests", comp.prs), ("Additions", comp.additions),
        ("Deletions", comp.deletions), ("Repositories", comp.repos), ("Longest streak", comp.streak),
    ):
        style = "green" if metric.change >= 0 else "red"
        table.add_row(
            label, format_number(metric.previous), format_number(metric.current),
            Text(format_change(metric.change), style=style),
        )
    message = comparison_message(comp.commits.change, stats.year)
    if message:
        table.caption = message
    return table


def format_terminal(stats: WrappedStats, width: int = 100, color: bool = True) -> str:
    """Render the report with rich and return it as a string (ANSI codes when `color`)."""
    out = io.StringIO()
    console = Console(file=out, width=width, force_terminal=color, no_color=not color)
    personality = PERSONALITIES[stats.personality]

    console.print(Text(f"🎁 Git Wrapped {stats.year}", style="bold magenta", justify="center"))
    console.print(Text(f"Your {stats.year} Year in Review", style="dim", justify="center"))
    console.print(_panel(Text(f"@{stats.username}", style="bold"), "👤 Profile", "cyan"))
    console.print(_panel(_main_stats(stats), "📊 Stats", "green"))
    console.print(_panel(_code_changes(stats), "📝 Code Changes", "magenta"))
    console.print(_panel(_time_analysis(stats), "⏰ When You Code", "yellow"))
    console.print(_panel(_languages(stats), "💻 Languages", "blue"))
    console.print(_panel(_top_repos(stats), "📁 Top Repositories", "cyan"))
    console.print(_panel(
        Group(Text(f"{personality.emoji} {personality.title}", style="bold"),
              Text(personality.description, style="italic")),
        "🎭 Your Developer Personality", "magenta",
    ))
    console.print(_panel(_insights(stats), "✨ Fun Insights", "yellow"))
    console.print(_panel(Text(ascii_heatmap(stats), style="green"), "📆 Contribution Heatmap", "green"))
    if stats.year_comparison and stats.year_comparison.commits.previous > 0:
        console.print(_panel(_comparison(stats), f"📊 {stats.year_comparison.previous_year} vs {stats.year}", "blue"))
    console.print(Text("Generated by git-wrapped", style="dim", justify="center"))
    return out.getvalue()
