from typing import Iterable

from git_wrapped.models import ActivityRecord

WEEKDAYS = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
WEEKEND = ("Saturday", "Sunday")


def weekday_name(ts) -> str:
    # date.weekday() is Monday=0; shift so Sunday lands at index 0
    return WEEKDAYS[(ts.weekday() + 1) % 7]


def compute_commit_patterns(records: Iterable[ActivityRecord]) -> tuple[dict[str, int], list[int]]:
    """Bucket commits by weekday name and by hour of day.

    Both use the timestamp's own UTC offset. Returns (by_day, by_hour); all
    seven weekdays are present even when zero.
    """
    by_day = {day: 0 for day in WEEKDAYS}
    by_hour = [0] * 24
    for record in records:
        by_day[weekday_name(record.timestamp)] += 1
        by_hour[record.timestamp.hour] += 1
    return by_day, by_hour
