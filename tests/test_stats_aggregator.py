from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from git_wrapped.analyzers.stats_aggregator import (
    build_wrapped_stats,
    fold_day_stats,
    fold_repo_stats,
    merge_languages,
    rank_collaborators,
)
from git_wrapped.models import ActivityRecord, ActivitySnapshot, Collaborator, Personality

TODAY = date(2025, 6, 1)


def _rec(sha: str, ts: datetime, repo: str = "me/app", additions: int = 0, deletions: int = 0,
         message: str = "") -> ActivityRecord:
    return ActivityRecord(sha=sha, message=message, timestamp=ts, repo=repo,
                          additions=additions, deletions=deletions)


def _utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def test_two_day_scenario():
    snapshot = ActivitySnapshot(username="me", year=2024, commits=[
        _rec("a", _utc(2024, 1, 1, 10), additions=10, deletions=2),
        _rec("b", _utc(2024, 1, 2, 11), additions=5, deletions=5),
    ])
    stats = build_wrapped_stats(snapshot, today=TODAY)
    assert stats.total_additions == 15
    assert stats.total_deletions == 7
    assert stats.longest_streak == 2
    assert stats.streak_start == "2024-01-01"
    assert stats.streak_end == "2024-01-02"
    assert stats.most_productive_day == "Monday"
    assert stats.most_productive_hour == 10
    assert stats.current_streak == 0


def test_polyglot_single_repo_scenario():
    languages = {"Python": 850, "Go": 50, "Rust": 40, "C": 30, "Shell": 30}
    snapshot = ActivitySnapshot(
        username="me",
        year=2024,
        commits=[_rec(str(d), _utc(2024, 4, d, 14), additions=100, deletions=50) for d in (1, 2, 3)],
        repo_languages={"me/app": languages},
    )
    stats = build_wrapped_stats(snapshot, today=TODAY)
    emojis = [f.emoji for f in stats.fun_facts]
    assert "🌍" in emojis
    assert "💘" in emojis
    assert stats.personality == Personality.POLYGLOT
    assert stats.top_language == "Python"
    assert stats.repos[0].languages == languages


def test_empty_snapshot_produces_complete_report():
    stats = build_wrapped_stats(ActivitySnapshot(username="me", year=2024), today=TODAY)
    assert stats.total_commits == 0
    assert stats.repo_count == 0
    assert stats.most_active_repo == ""
    assert stats.top_language == "Unknown"
    assert stats.most_productive_day == "Sunday"
    assert stats.most_productive_hour == 0
    assert stats.personality == Personality.NINE_TO_FIVER
    assert stats.biggest_day.commits == 0
    assert stats.biggest_deletion is None
    assert stats.fun_facts == []
    assert stats.collaborators == []
    assert stats.top_collaborator is None
    assert stats.year_comparison is None
    assert len(stats.heatmap.weeks) >= 52
    assert sum(stats.commits_by_day.values()) == 0
    assert stats.commits_by_hour == [0] * 24


def test_fold_repo_stats_keeps_first_seen_order():
    records = [
        _rec("1", _utc(2024, 1, 1), repo="me/b", additions=1),
        _rec("2", _utc(2024, 1, 1), repo="me/a", additions=2),
        _rec("3", _utc(2024, 1, 2), repo="me/b", additions=3, deletions=4),
    ]
    repos = fold_repo_stats(records, {})
    assert [r.name for r in repos] == ["me/b", "me/a"]
    assert (repos[0].commits, repos[0].additions, repos[0].deletions) == (2, 4, 4)


def test_fold_day_stats_groups_by_date():
    records = [
        _rec("1", _utc(2024, 1, 2, 9), deletions=10),
        _rec("2", _utc(2024, 1, 1, 9)),
        _rec("3", _utc(2024, 1, 2, 20), deletions=5),
    ]
    days = fold_day_stats(records)
    assert [d.date for d in days] == ["2024-01-02", "2024-01-01"]
    assert days[0].commits == 2
    assert days[0].deletions == 15


def test_most_active_repo_tie_goes_to_first_seen():
    snapshot = ActivitySnapshot(username="me", year=2024, commits=[
        _rec("1", _utc(2024, 1, 1), repo="me/z"),
        _rec("2", _utc(2024, 1, 2), repo="me/a"),
    ])
    assert build_wrapped_stats(snapshot, today=TODAY).most_active_repo == "me/z"


def test_daily_commits_sorted_but_biggest_day_first_seen():
    snapshot = ActivitySnapshot(username="me", year=2024, commits=[
        _rec("1", _utc(2024, 5, 1)),
        _rec("2", _utc(2024, 1, 1)),
    ])
    stats = build_wrapped_stats(snapshot, today=TODAY)
    assert [d.date for d in stats.daily_commits] == ["2024-01-01", "2024-05-01"]
    assert stats.biggest_day.date == "2024-05-01"


def test_biggest_deletion_floor():
    snapshot = ActivitySnapshot(username="me", year=2024, commits=[
        _rec("1", _utc(2024, 2, 1), deletions=600),
        _rec("2", _utc(2024, 2, 1), deletions=400),
        _rec("3", _utc(2024, 2, 2), deletions=999),
    ])
    stats = build_wrapped_stats(snapshot, today=TODAY)
    assert stats.biggest_deletion.date == "2024-02-01"
    assert stats.biggest_deletion.lines == 1000


def test_heatmap_ignores_activity_outside_year():
    snapshot = ActivitySnapshot(username="me", year=2024, commits=[
        _rec("1", _utc(2023, 12, 31)),
        _rec("2", _utc(2024, 3, 3)),
    ])
    stats = build_wrapped_stats(snapshot, today=TODAY)
    cells = {d.date: d for w in stats.heatmap.weeks for d in w.days}
    assert cells["2023-12-31"].commits == 0
    assert cells["2024-03-03"].level == 4


def test_merge_languages_sums_bytes():
    merged = merge_languages({"me/a": {"Python": 10, "Go": 5}, "me/b": {"Python": 1}})
    assert merged == {"Python": 11, "Go": 5}


def test_rank_collaborators_top_ten_stable():
    people = [Collaborator(username=f"u{i}", interactions=1) for i in range(12)]
    people.append(Collaborator(username="top", interactions=9))
    ranked = rank_collaborators(people)
    assert len(ranked) == 10
    assert ranked[0].username == "top"
    assert [c.username for c in ranked[1:]] == [f"u{i}" for i in range(9)]


def test_year_comparison_attached_when_previous_given():
    previous = build_wrapped_stats(ActivitySnapshot(username="me", year=2023, pr_count=2, commits=[
        _rec("p", _utc(2023, 6, 1)),
        _rec("q", _utc(2023, 6, 2)),
    ]), today=TODAY)
    current = build_wrapped_stats(ActivitySnapshot(username="me", year=2024, pr_count=3, commits=[
        _rec("a", _utc(2024, 6, 1)),
        _rec("b", _utc(2024, 6, 2)),
        _rec("c", _utc(2024, 6, 3)),
    ]), previous=previous, today=TODAY)
    comp = current.year_comparison
    assert comp.previous_year == 2023
    assert comp.commits.change == 50
    assert comp.prs.change == 50
    assert comp.streak.change == 50


def test_report_parts_are_immutable():
    snapshot = ActivitySnapshot(username="me", year=2024, commits=[
        _rec("1", _utc(2024, 1, 1), additions=5),
    ], collaborators=[Collaborator(username="alice", interactions=2)])
    stats = build_wrapped_stats(snapshot, today=TODAY)
    with pytest.raises(ValidationError):
        stats.daily_commits[0].commits = 99
    with pytest.raises(ValidationError):
        stats.repos[0].additions = 99
    with pytest.raises(ValidationError):
        stats.collaborators[0].interactions = 99
    with pytest.raises(ValidationError):
        stats.heatmap.weeks[0].days[0].level = 4
    assert stats.daily_commits[0].commits == 1
