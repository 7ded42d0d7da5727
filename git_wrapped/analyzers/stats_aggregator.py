"""Fold an activity snapshot into the WrappedStats report.

Pure and synchronous: all network access happens before this runs, and the
same snapshot always produces the same report (apart from the current
streak, which is measured against `today`).
"""
from datetime import date
from typing import Callable, Optional

from git_wrapped.analyzers.fun_facts import FunFactInput, generate_fun_facts
from git_wrapped.analyzers.heatmap_builder import build_heatmap
from git_wrapped.analyzers.highlight_finder import find_biggest_day, find_biggest_deletion
from git_wrapped.analyzers.personality import PersonalitySignals, classify_personality
from git_wrapped.analyzers.streak_analyzer import calculate_streaks
from git_wrapped.analyzers.year_comparator import compare_years
from git_wrapped.models import (
    ActivityRecord,
    ActivitySnapshot,
    Collaborator,
    DayStats,
    RepoStats,
    WrappedStats,
)
from git_wrapped.utils.patterns import compute_commit_patterns

TOP_COLLABORATORS = 10


def _fold(records: list[ActivityRecord], key: Callable[[ActivityRecord], str]) -> dict[str, tuple[int, int, int]]:
    """(commits, additions, deletions) per key, in first-seen order."""
    totals: dict[str, tuple[int, int, int]] = {}
    for r in records:
        commits, additions, deletions = totals.get(key(r), (0, 0, 0))
        totals[key(r)] = (commits + 1, additions + r.additions, deletions + r.deletions)
    return totals


def fold_repo_stats(records: list[ActivityRecord], repo_languages: dict[str, dict[str, int]]) -> list[RepoStats]:
    """One RepoStats per repository, in first-seen order."""
    return [
        RepoStats(name=name, commits=commits, additions=additions, deletions=deletions,
                  languages=dict(repo_languages.get(name, {})))
        for name, (commits, additions, deletions) in _fold(records, lambda r: r.repo).items()
    ]


def fold_day_stats(records: list[ActivityRecord]) -> list[DayStats]:
    """One DayStats per active date, in first-seen order."""
    return [
        DayStats(date=day, commits=commits, additions=additions, deletions=deletions)
        for day, (commits, additions, deletions) in _fold(records, lambda r: r.date_key).items()
    ]


def merge_languages(repo_languages: dict[str, dict[str, int]]) -> dict[str, int]:
    totals: dict[str, int] = {}
    for languages in repo_languages.values():
        for lang, size in languages.items():
            totals[lang] = totals.get(lang, 0) + size
    return totals


def rank_collaborators(collaborators: list[Collaborator]) -> list[Collaborator]:
    # sorted() is stable, so equal counts keep their fetched order
    return sorted(collaborators, key=lambda c: c.interactions, reverse=True)[:TOP_COLLABORATORS]


def _first_max(values: dict[str, int], default: str) -> str:
    if not values:
        return default
    return max(values.items(), key=lambda item: item[1])[0]


def build_wrapped_stats(
    snapshot: ActivitySnapshot,
    previous: Optional[WrappedStats] = None,
    today: Optional[date] = None,
) -> WrappedStats:
    """Build the year-in-review report for one snapshot.

    `previous` is the already-built report for the prior year; when it is
    None the report carries no year comparison.
    """
    records = snapshot.commits

    repos = fold_repo_stats(records, snapshot.repo_languages)
    days = fold_day_stats(records)
    by_day, by_hour = compute_commit_patterns(records)
    streaks = calculate_streaks((d.date for d in days), today=today)
    languages = merge_languages(snapshot.repo_languages)
    collaborators = rank_collaborators(snapshot.collaborators)

    total_additions = sum(r.additions for r in records)
    total_deletions = sum(r.deletions for r in records)

    personality = classify_personality(PersonalitySignals(
        by_day=by_day,
        by_hour=by_hour,
        longest_streak=streaks.longest_streak,
        total_additions=total_additions,
        total_deletions=total_deletions,
        review_count=snapshot.review_count,
        language_count=len(languages),
        repo_count=len(repos),
    ))

    most_productive_hour = by_hour.index(max(by_hour))

    fun_facts = generate_fun_facts(FunFactInput(
        by_day=by_day,
        by_hour=by_hour,
        most_productive_hour=most_productive_hour,
        total_commits=len(records),
        total_additions=total_additions,
        total_deletions=total_deletions,
        longest_streak=streaks.longest_streak,
        repo_count=len(repos),
        languages=languages,
        active_days=len(days),
        records=list(records),
    ))

    stats = WrappedStats(
        username=snapshot.username,
        avatar_url=snapshot.avatar_url,
        year=snapshot.year,
        total_commits=len(records),
        total_prs=snapshot.pr_count,
        total_issues=snapshot.issue_count,
        total_reviews=snapshot.review_count,
        total_additions=total_additions,
        total_deletions=total_deletions,
        repos=repos,
        most_active_repo=_first_max({r.name: r.commits for r in repos}, ""),
        repo_count=len(repos),
        commits_by_day=by_day,
        commits_by_hour=by_hour,
        most_productive_day=_first_max(by_day, ""),
        most_productive_hour=most_productive_hour,
        longest_streak=streaks.longest_streak,
        current_streak=streaks.current_streak,
        streak_start=streaks.longest_start,
        streak_end=streaks.longest_end,
        languages=languages,
        top_language=_first_max(languages, "Unknown"),
        collaborators=collaborators,
        top_collaborator=collaborators[0].username if collaborators else None,
        personality=personality,
        biggest_day=find_biggest_day(days),
        biggest_deletion=find_biggest_deletion(days),
        daily_commits=sorted(days, key=lambda d: d.date),
        heatmap=build_heatmap(days, snapshot.year),
        fun_facts=fun_facts,
    )
    comparison = compare_years(stats, previous)
    if comparison is None:
        return stats
    return stats.model_copy(update={"year_comparison": comparison})
