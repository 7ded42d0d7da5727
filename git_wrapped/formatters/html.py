"""Standalone HTML page for a WrappedStats report (inline CSS, no scripts)."""
from html import escape

from git_wrapped.formatters.common import (
    addition_share,
    comparison_message,
    format_change,
    format_day,
    format_hour,
    format_number,
    top_languages,
    top_repos,
)
from git_wrapped.models import PERSONALITIES, WrappedStats

_STYLE = """
body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Helvetica, Arial, sans-serif;
       background: #0d1117; color: #e6edf3; max-width: 960px; margin: 0 auto; padding: 32px; }
h1 { text-align: center; }
.section { background: #161b22; border-radius: 12px; padding: 20px; margin-bottom: 20px; }
.section-title { font-weight: 600; font-size: 18px; margin-bottom: 12px; }
.stats { display: grid; grid-template-columns: repeat(5, 1fr); gap: 12px; text-align: center; }
.stat-value { font-size: 28px; font-weight: 700; }
.stat-label { color: #8b949e; font-size: 12px; }
.changes { height: 12px; display: flex; border-radius: 6px; overflow: hidden; }
.changes .add { background: #3fb950; } .changes .del { background: #f85149; }
.heatmap-grid { display: flex; gap: 3px; overflow-x: auto; }
.heatmap-week { display: flex; flex-direction: column; gap: 3px; }
.heatmap-day { width: 11px; height: 11px; border-radius: 2px; }
.heatmap-level-0 { background: rgba(255, 255, 255, 0.1); }
.heatmap-level-1 { background: #0e4429; }
.heatmap-level-2 { background: #006d32; }
.heatmap-level-3 { background: #26a641; }
.heatmap-level-4 { background: #39d353; }
.positive { color: #3fb950; } .negative { color: #f85149; }
.fact { padding: 6px 0; }
footer { text-align: center; color: #8b949e; font-size: 12px; }
"""


def _stat(value: str, label: str) -> str:
    return f'<div><div class="stat-value">{escape(value)}</div><div class="stat-label">{escape(label)}</div></div>'


def _heatmap(stats: WrappedStats) -> str:
    parts = ['<div class="heatmap-grid">']
    for week in stats.heatmap.weeks:
        parts.append('<div class="heatmap-week">')
        for day in week.days:
            title = escape(f"{day.date}: {day.commits} commits")
            parts.append(f'<div class="heatmap-day heatmap-level-{day.level}" title="{title}"></div>')
        parts.append("</div>")
    parts.append("</div>")
    return "".join(parts)


def _section(title: str, body: str) -> str:
    return f'<div class="section"><div class="section-title">{title}</div>{body}</div>'


def format_html(stats: WrappedStats) -> str:
    personality = PERSONALITIES[stats.personality]
    user = escape(stats.username)
    add_pct = addition_share(stats)
    sections: list[str] = []

    sections.append(_section("📊 Overview", '<div class="stats">' + "".join([
        _stat(format_number(stats.total_commits), "commits"),
        _stat(format_number(stats.total_prs), "pull requests"),
        _stat(format_number(stats.total_issues), "issues"),
        _stat(format_number(stats.total_reviews), "reviews"),
        _stat(str(stats.repo_count), "repositories"),
    ]) + "</div>"))

    sections.append(_section("📝 Code Changes", (
        f"<p>+{escape(format_number(stats.total_additions))} added · "
        f"-{escape(format_number(stats.total_deletions))} deleted</p>"
        f'<div class="changes"><div class="add" style="width:{add_pct}%"></div>'
        f'<div class="del" style="width:{100 - add_pct}%"></div></div>'
    )))

    streak = f"<p>🔥 Longest streak: <b>{stats.longest_streak}</b> days</p>"
    if stats.current_streak > 0:
        streak += f"<p>Current streak: <b>{stats.current_streak}</b> days</p>"
    sections.append(_section("⏰ When You Code", (
        f"<p>📅 Most productive day: <b>{escape(stats.most_productive_day)}</b></p>"
        f"<p>⏰ Peak coding hour: <b>{format_hour(stats.most_productive_hour)}</b></p>" + streak
    )))

    languages = top_languages(stats)
    lang_body = "".join(f"<p><b>{escape(lang)}</b> {pct}%</p>" for lang, pct in languages)
    sections.append(_section("💻 Languages", lang_body or "<p>No language data available</p>"))

    repo_body = "".join(
        f"<p><b>{escape(r.name)}</b> ({r.commits} commits)</p>" for r in top_repos(stats)
    )
    sections.append(_section("📁 Top Repositories", repo_body or "<p>No repositories</p>"))

    sections.append(_section("🎭 Developer Personality", (
        f"<p>{personality.emoji} <b>{escape(personality.title)}</b></p>"
        f"<p><i>{escape(personality.description)}</i></p>"
    )))

    insights: list[str] = []
    if stats.biggest_day.commits > 0:
        insights.append(
            f"📈 Your most committed day was <b>{format_day(stats.biggest_day.date)}</b> "
            f"with <b>{stats.biggest_day.commits}</b> commits!"
        )
    if stats.biggest_deletion:
        insights.append(
            f"🧹 You mass-deleted <b>{format_number(stats.biggest_deletion.lines)}</b> lines "
            f"on {format_day(stats.biggest_deletion.date)}"
        )
    if stats.top_collaborator:
        insights.append(f"🤝 Most collaborated with: <b>@{escape(stats.top_collaborator)}</b>")
    if insights:
        sections.append(_section("✨ Fun Insights", "".join(f'<div class="fact">{i}</div>' for i in insights)))

    sections.append(_section("📆 Contribution Heatmap", _heatmap(stats)))

    comp = stats.year_comparison
    if comp and comp.commits.previous > 0:
        rows = []
        for label, metric in (("Commits", comp.commits), ("Pull Requests", comp.prs), ("Repositories", comp.repos)):
            css = "positive" if metric.change >= 0 else "negative"
            rows.append(
                f"<p>{label}: {format_number(metric.previous)} → {format_number(metric.current)} "
                f'<span class="{css}">{format_change(metric.change)}</span></p>'
            )
        message = comparison_message(comp.commits.change, stats.year)
        if message:
            rows.append(f"<p>{escape(message)}</p>")
        sections.append(_section(f"📊 {comp.previous_year} vs {stats.year}", "".join(rows)))

    if stats.fun_facts:
        facts = "".join(f'<div class="fact">{f.emoji} {escape(f.text)}</div>' for f in stats.fun_facts)
        sections.append(_section("🎲 Fun Facts", facts))

    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n<head>\n<meta charset="utf-8">\n'
        f"<title>Git Wrapped {stats.year} · @{user}</title>\n"
        f"<style>{_STYLE}</style>\n</head>\n<body>\n"
        f"<h1>🎁 Git Wrapped {stats.year}</h1>\n"
        f'<p style="text-align:center">@{user}\'s Year in Review</p>\n'
        + "\n".join(sections)
        + "\n<footer>Generated by git-wrapped</footer>\n</body>\n</html>\n"
    )
