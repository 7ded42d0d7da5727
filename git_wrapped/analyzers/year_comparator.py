from typing import Optional

from git_wrapped.models import MetricChange, WrappedStats, YearComparison


def percent_change(current: int, previous: int) -> int:
    """Whole-number percent change; growth from nothing counts as +100%."""
    if previous == 0:
        return 100 if current > 0 else 0
    return round((current - previous) / previous * 100)


def _metric(current: int, previous: int) -> MetricChange:
    return MetricChange(current=current, previous=previous, change=percent_change(current, previous))


def compare_years(current: WrappedStats, previous: Optional[WrappedStats]) -> Optional[YearComparison]:
    if previous is None:
        return None
    return YearComparison(
        previous_year=previous.year,
        commits=_metric(current.total_commits, previous.total_commits),
        prs=_metric(current.total_prs, previous.total_prs),
        additions=_metric(current.total_additions, previous.total_additions),
        deletions=_metric(current.total_deletions, previous.total_deletions),
        repos=_metric(current.repo_count, previous.repo_count),
        streak=_metric(current.longest_streak, previous.longest_streak),
    )
