from typing import Iterable, Optional

from git_wrapped.models import BiggestDay, BiggestDeletion, DayStats

# smaller clean-ups are noise, not a highlight
DELETION_FLOOR = 1000


def find_biggest_day(daily: Iterable[DayStats]) -> BiggestDay:
    """Day with the most commits; the first one seen wins ties."""
    biggest = BiggestDay()
    for day in daily:
        if day.commits > biggest.commits:
            biggest = BiggestDay(date=day.date, commits=day.commits)
    return biggest


def find_biggest_deletion(daily: Iterable[DayStats]) -> Optional[BiggestDeletion]:
    """Day with the most deleted lines, or None when no day reaches DELETION_FLOOR."""
    biggest: Optional[BiggestDeletion] = None
    for day in daily:
        if day.deletions >= DELETION_FLOOR and (biggest is None or day.deletions > biggest.lines):
            biggest = BiggestDeletion(date=day.date, lines=day.deletions)
    return biggest
