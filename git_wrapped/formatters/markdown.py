from git_wrapped.formatters.common import (
    WEEKDAY_ORDER,
    addition_share,
    ascii_heatmap,
    bar,
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

MEDALS = ["🥇", "🥈", "🥉", "4.", "5."]


def format_report(stats: WrappedStats) -> str:
    """Format a WrappedStats report as a Markdown document."""
    personality = PERSONALITIES[stats.personality]
    sections = [f"# 🎁 Git Wrapped {stats.year}\n", f"## @{stats.username}'s Year in Review\n"]

    sections.append("### 📊 Overview\n")
    sections.append("| Metric | Count |")
    sections.append("|--------|-------|")
    sections.append(f"| 💻 Commits | {format_number(stats.total_commits)} |")
    sections.append(f"| 🔀 Pull Requests | {format_number(stats.total_prs)} |")
    sections.append(f"| 🐛 Issues | {format_number(stats.total_issues)} |")
    sections.append(f"| 👀 Reviews | {format_number(stats.total_reviews)} |")
    sections.append(f"| 📁 Repositories | {stats.repo_count} |")
    sections.append("")

    add_pct = addition_share(stats)
    sections.append("### 📝 Code Changes\n")
    sections.append(f"- **+{format_number(stats.total_additions)}** lines added")
    sections.append(f"- **-{format_number(stats.total_deletions)}** lines deleted\n")
    sections.append("```")
    sections.append(bar(add_pct, 100, 50))
    sections.append(f"{add_pct}% additions | {100 - add_pct}% deletions")
    sections.append("```\n")

    sections.append("### 🔥 Streaks\n")
    sections.append(f"- **Longest streak:** {stats.longest_streak} days")
    if stats.current_streak > 0:
        sections.append(f"- **Current streak:** {stats.current_streak} days")
    sections.append("")

    sections.append("### ⏰ When You Code\n")
    sections.append(f"- **Most productive day:** {stats.most_productive_day}")
    sections.append(f"- **Peak coding hour:** {format_hour(stats.most_productive_hour)}\n")
    sections.append("#### Commits by Day\n")
    sections.append("```")
    max_day = max((stats.commits_by_day.get(d, 0) for d in WEEKDAY_ORDER), default=0)
    for day in WEEKDAY_ORDER:
        count = stats.commits_by_day.get(day, 0)
        sections.append(f"{day[:3]} {bar(count, max_day, 30)} {count}")
    sections.append("```\n")

    sections.append("### 💻 Top Languages\n")
    languages = top_languages(stats)
    if languages:
        for lang, pct in languages:
            sections.append(f"- **{lang}**: {pct}%")
    else:
        sections.append("_No language data available_")
    sections.append("")

    sections.append("### 📁 Top Repositories\n")
    for medal, repo in zip(MEDALS, top_repos(stats)):
        sections.append(f"{medal} **{repo.name}** ({repo.commits} commits)")
    sections.append("")

    sections.append("### 🎭 Developer Personality\n")
    sections.append(f"> {personality.emoji} **{personality.title}**")
    sections.append(">")
    sections.append(f"> _{personality.description}_\n")

    sections.append("### ✨ Fun Insights\n")
    if stats.biggest_day.commits > 0:
        sections.append(
            f"- 📈 Your most committed day was **{format_day(stats.biggest_day.date)}** "
            f"with **{stats.biggest_day.commits}** commits!"
        )
    if stats.biggest_deletion:
        sections.append(
            f"- 🧹 You mass-deleted **{format_number(stats.biggest_deletion.lines)}** lines "
            f"on {format_day(stats.biggest_deletion.date)} (spring cleaning?)"
        )
    sections.append(
        f"- {peak_hour_emoji(stats.most_productive_hour)} Peak coding hour: "
        f"**{format_hour(stats.most_productive_hour)}**"
    )
    if stats.top_collaborator:
        sections.append(f"- 🤝 Most collaborated with: **@{stats.top_collaborator}**")
    if stats.languages:
        sections.append(f"- 💝 Your top language: **{stats.top_language}**")
    sections.append("")

    sections.append("### 📆 Contribution Heatmap\n")
    sections.append("```")
    sections.append(ascii_heatmap(stats))
    sections.append("```\n")

    comp = stats.year_comparison
    if comp and comp.commits.previous > 0:
        sections.append(f"### 📊 {comp.previous_year} vs {stats.year}\n")
        sections.append(f"| Metric | {comp.previous_year} | {stats.year} | Change |")
        sections.append("|--------|------|------|--------|")
        for label, metric in (("Commits", comp.commits), ("Pull Requests", comp.prs), ("Repositories", comp.repos)):
            sections.append(
                f"| {label} | {format_number(metric.previous)} | {format_number(metric.current)} "
                f"| {format_change(metric.change)} |"
            )
        message = comparison_message(comp.commits.change, stats.year)
        if message:
            sections.append(f"\n> {message}")
        sections.append("")

    if stats.fun_facts:
        sections.append("### 🎲 Fun Facts\n")
        for fact in stats.fun_facts:
            sections.append(f"- {fact.emoji} {fact.text}")
        sections.append("")

    sections.append("---\n")
    sections.append("_Generated by git-wrapped_ 🎁")
    return "\n".join(sections)
