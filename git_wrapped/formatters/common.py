from datetime import date

from git_wrapped.models import WrappedStats

WEEKDAY_ORDER = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
HEATMAP_CHARS = [" ", "░", "▒", "▓", "█"]
MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def format_number(num: int) -> str:
    if num >= 1_000_000:
        return f"{num / 1_000_000:.1f}M"
    if num >= 1_000:
        return f"{num / 1_000:.1f}K"
    return f"{num:,}"


def format_hour(hour: int) -> str:
    if hour == 0:
        return "12 AM"
    if hour == 12:
        return "12 PM"
    if hour < 12:
        return f"{hour} AM"
    return f"{hour - 12} PM"


def format_change(change: int) -> str:
    if change > 0:
        return f"+{change}%"
    return f"{change}%"


def format_day(iso: str) -> str:
    """'2024-03-07' -> 'March 7'."""
    d = date.fromisoformat(iso)
    return f"{d.strftime('%B')} {d.day}"


def bar(value: int, maximum: int, width: int) -> str:
    if maximum <= 0:
        return "░" * width
    filled = round(value / maximum * width)
    return "█" * filled + "░" * (width - filled)


def addition_share(stats: WrappedStats) -> int:
    total = stats.total_additions + stats.total_deletions
    return round(stats.total_additions / total * 100) if total else 50


def top_languages(stats: WrappedStats, limit: int = 5) -> list[tuple[str, int]]:
    """(language, percent of the listed languages), largest first."""
    ranked = sorted(stats.languages.items(), key=lambda kv: kv[1], reverse=True)[:limit]
    total = sum(size for _, size in ranked)
    return [(lang, round(size / total * 100) if total else 0) for lang, size in ranked]


def top_repos(stats: WrappedStats, limit: int = 5):
    return sorted(stats.repos, key=lambda r: r.commits, reverse=True)[:limit]


def peak_hour_emoji(hour: int) -> str:
    if hour >= 22 or hour < 4:
        return "🦉"
    if 5 <= hour < 9:
        return "🌅"
    return "☕"


def comparison_message(change: int, year: int) -> str:
    if change > 20:
        return f"🚀 You coded {change}% more in {year}! Keep crushing it!"
    if change > 0:
        return f"📈 Steady growth! {change}% more commits than last year."
    if change < -20:
        return f"🧘 Taking it easier in {year}, quality over quantity!"
    return ""


def ascii_heatmap(stats: WrappedStats) -> str:
    weeks = stats.heatmap.weeks[:53]
    header = "     "
    current_month = -1
    for week in weeks:
        month = date.fromisoformat(week.days[0].date).month - 1
        if month != current_month:
            current_month = month
            header += MONTHS[month][0]
        else:
            header += " "

    lines = [header.rstrip()]
    for d, label in enumerate(["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]):
        row = label + "  "
        for week in weeks:
            cell = week.days[d]
            in_year = cell.date.startswith(f"{stats.year}-")
            row += HEATMAP_CHARS[cell.level] if in_year else " "
        lines.append(row.rstrip())
    lines.append("")
    lines.append("Less " + "".join(HEATMAP_CHARS) + " More")
    return "\n".join(lines)
