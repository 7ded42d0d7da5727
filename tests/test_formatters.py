import json
from datetime import date, datetime, timezone

import pytest

from git_wrapped.analyzers.stats_aggregator import build_wrapped_stats
from git_wrapped.formatters.common import (
    ascii_heatmap,
    bar,
    format_change,
    format_day,
    format_hour,
    format_number,
    top_languages,
)
from git_wrapped.formatters.html import format_html
from git_wrapped.formatters.json_format import format_json
from git_wrapped.formatters.markdown import format_report
from git_wrapped.formatters.terminal import format_terminal
from git_wrapped.models import ActivityRecord, ActivitySnapshot, Collaborator, FunFact

TODAY = date(2025, 6, 1)


def _snapshot(year: int = 2024, commits: int = 6, username: str = "octo") -> ActivitySnapshot:
    records = [
        ActivityRecord(
            sha=f"{year}-{i}",
            message="Fix thing",
            timestamp=datetime(year, 3, 4 + i, 23, 30, tzinfo=timezone.utc),
            repo="octo/app" if i % 2 else "octo/lib",
            additions=40,
            deletions=10,
        )
        for i in range(commits)
    ]
    return ActivitySnapshot(
        username=username,
        year=year,
        commits=records,
        pr_count=4,
        repo_languages={"octo/app": {"Python": 750, "Rust": 250}},
        collaborators=[Collaborator(username="alice", interactions=3)],
    )


@pytest.fixture
def stats():
    previous = build_wrapped_stats(_snapshot(2023, commits=3), today=TODAY)
    return build_wrapped_stats(_snapshot(), previous=previous, today=TODAY)


# ── common helpers ───────────────────────────────────────────────────────────

def test_format_number():
    assert format_number(999) == "999"
    assert format_number(1500) == "1.5K"
    assert format_number(2_340_000) == "2.3M"


def test_format_hour():
    assert [format_hour(h) for h in (0, 9, 12, 23)] == ["12 AM", "9 AM", "12 PM", "11 PM"]


def test_format_change_and_day():
    assert format_change(25) == "+25%"
    assert format_change(-10) == "-10%"
    assert format_change(0) == "0%"
    assert format_day("2024-03-07") == "March 7"


def test_bar():
    assert bar(5, 10, 4) == "██░░"
    assert bar(0, 0, 3) == "░░░"


def test_top_languages_percentages(stats):
    assert top_languages(stats) == [("Python", 75), ("Rust", 25)]


def test_ascii_heatmap_has_day_rows_and_legend(stats):
    lines = ascii_heatmap(stats).splitlines()
    assert [line[:3] for line in lines[1:8]] == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
    assert lines[-1] == "Less  ░▒▓█ More"


# ── renderers ────────────────────────────────────────────────────────────────

def test_markdown_report(stats):
    report = format_report(stats)
    assert report.startswith("# 🎁 Git Wrapped 2024")
    assert "@octo's Year in Review" in report
    assert "| 💻 Commits | 6 |" in report
    assert "🦉 **Night Owl**" in report
    assert "Most collaborated with: **@alice**" in report
    assert "### 📊 2023 vs 2024" in report
    assert "| Commits | 3 | 6 | +100% |" in report
    for fact in stats.fun_facts:
        assert f"- {fact.emoji} {fact.text}" in report


def test_markdown_hides_comparison_without_previous_commits():
    previous = build_wrapped_stats(_snapshot(2023, commits=0), today=TODAY)
    stats = build_wrapped_stats(_snapshot(), previous=previous, today=TODAY)
    assert stats.year_comparison is not None
    assert "2023 vs 2024" not in format_report(stats)


def test_markdown_empty_report():
    stats = build_wrapped_stats(ActivitySnapshot(username="octo", year=2024), today=TODAY)
    report = format_report(stats)
    assert "_No language data available_" in report
    assert "Fun Facts" not in report


def test_json_round_trips_report(stats):
    data = json.loads(format_json(stats))
    assert data["username"] == "octo"
    assert data["total_commits"] == 6
    assert data["personality"] == "night-owl"
    assert data["year_comparison"]["commits"]["change"] == 100
    assert len(data["heatmap"]["weeks"]) >= 52
    assert len(data["commits_by_hour"]) == 24


def test_html_is_standalone_and_escaped():
    snapshot = _snapshot(username="<b>octo</b>")
    snapshot.collaborators = [Collaborator(username="a&b", interactions=1)]
    page = format_html(build_wrapped_stats(snapshot, today=TODAY))
    assert page.startswith("<!DOCTYPE html>")
    assert "<script" not in page
    assert "&lt;b&gt;octo&lt;/b&gt;" in page
    assert "<b>octo</b>" not in page
    assert "@a&amp;b" in page
    assert page.count('class="heatmap-week"') >= 52


def test_terminal_plain_output(stats):
    out = format_terminal(stats, width=100, color=False)
    assert "\x1b[" not in out
    assert "Git Wrapped 2024" in out
    assert "@octo" in out
    assert "Night Owl" in out
    assert "2023 vs 2024" in out


def test_terminal_escapes_markup_in_fun_facts(stats):
    odd = stats.model_copy(update={"fun_facts": [FunFact(emoji="🎲", text="[bold]literal[/bold]", category="quirky")]})
    out = format_terminal(odd, width=120, color=False)
    assert "[bold]literal[/bold]" in out
