from datetime import date, timedelta
from typing import Iterable, Optional

from git_wrapped.models import StreakResult


def calculate_streaks(dates: Iterable[str], today: Optional[date] = None) -> StreakResult:
    """Find the longest run of consecutive active days and the run ending today.

    `dates` are ISO date strings; duplicates are ignored. The current streak
    is anchored to the wall clock (`today`), not to the last active date, so
    it reads 0 for past years.
    """
    active = set(dates)
    if not active:
        return StreakResult()

    # ISO strings sort chronologically
    ordered = [date.fromisoformat(d) for d in sorted(active)]

    longest = run = 1
    run_start = longest_start = longest_end = ordered[0]
    for prev, cur in zip(ordered, ordered[1:]):
        if cur - prev == timedelta(days=1):
            run += 1
            # strictly greater: the earliest run keeps ties
            if run > longest:
                longest = run
                longest_start, longest_end = run_start, cur
        else:
            run = 1
            run_start = cur

    check = today or date.today()
    current = 0
    while check.isoformat() in active:
        current += 1
        check -= timedelta(days=1)

    return StreakResult(
        longest_streak=longest,
        current_streak=current,
        longest_start=longest_start.isoformat(),
        longest_end=longest_end.isoformat(),
    )
