"""GitHub-style contribution calendar: Sunday-first weeks with 0-4 intensity levels."""
from datetime import date, timedelta
from typing import Iterable

from git_wrapped.models import DayStats, HeatmapData, HeatmapDay, HeatmapWeek

MIN_WEEKS = 52
# upper bound (inclusive) of commits/max for levels 1, 2, 3; anything above is 4
LEVEL_THRESHOLDS = (0.25, 0.50, 0.75)


def _grid_start(year: int) -> date:
    jan1 = date(year, 1, 1)
    return jan1 - timedelta(days=(jan1.weekday() + 1) % 7)


def intensity_level(commits: int, max_commits: int) -> int:
    if commits <= 0 or max_commits <= 0:
        return 0
    ratio = commits / max_commits
    for level, bound in enumerate(LEVEL_THRESHOLDS, start=1):
        if ratio <= bound:
            return level
    return 4


def build_heatmap(daily: Iterable[DayStats], year: int) -> HeatmapData:
    """Lay out `year` as a week-by-day grid.

    The grid starts on the Sunday on or before January 1 and runs until the
    week holding December 31 is complete and at least 52 weeks exist. Cells
    from the neighbouring years are always empty.
    """
    counts = {d.date: d.commits for d in daily}
    dec31 = date(year, 12, 31)

    cells: list[tuple[str, int]] = []
    max_commits = 0
    cursor = _grid_start(year)
    while cursor <= dec31 or len(cells) < MIN_WEEKS * 7 or len(cells) % 7:
        key = cursor.isoformat()
        commits = counts.get(key, 0) if cursor.year == year else 0
        max_commits = max(max_commits, commits)
        cells.append((key, commits))
        cursor += timedelta(days=1)

    weeks = [
        HeatmapWeek(days=[
            HeatmapDay(date=key, commits=commits, level=intensity_level(commits, max_commits))
            for key, commits in cells[i:i + 7]
        ])
        for i in range(0, len(cells), 7)
    ]
    return HeatmapData(weeks=weeks, max_commits=max_commits)
