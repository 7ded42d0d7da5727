from datetime import datetime, timedelta, timezone

from git_wrapped.models import ActivityRecord
from git_wrapped.utils.patterns import WEEKDAYS, compute_commit_patterns


def _rec(ts: datetime) -> ActivityRecord:
    return ActivityRecord(sha="a", timestamp=ts, repo="me/app")


RECORDS = [
    _rec(datetime(2024, 1, 1, 9, 30, tzinfo=timezone.utc)),   # Monday
    _rec(datetime(2024, 1, 1, 23, 5, tzinfo=timezone.utc)),   # Monday
    _rec(datetime(2024, 1, 6, 14, 0, tzinfo=timezone.utc)),   # Saturday
]


def test_returns_all_weekdays_and_24_hours():
    by_day, by_hour = compute_commit_patterns(RECORDS)
    assert list(by_day) == WEEKDAYS
    assert len(by_hour) == 24


def test_counts_by_day_and_hour():
    by_day, by_hour = compute_commit_patterns(RECORDS)
    assert by_day["Monday"] == 2
    assert by_day["Saturday"] == 1
    assert by_hour[9] == 1
    assert by_hour[23] == 1
    assert by_hour[14] == 1


def test_histograms_sum_to_record_count():
    by_day, by_hour = compute_commit_patterns(RECORDS)
    assert sum(by_day.values()) == len(RECORDS)
    assert sum(by_hour) == len(RECORDS)


def test_uses_timestamp_local_offset():
    # 01:00 on Tuesday in UTC+2 is still Monday 23:00 UTC
    tz = timezone(timedelta(hours=2))
    by_day, by_hour = compute_commit_patterns([_rec(datetime(2024, 1, 2, 1, 0, tzinfo=tz))])
    assert by_day["Tuesday"] == 1
    assert by_hour[1] == 1


def test_empty_records_returns_zeroes():
    by_day, by_hour = compute_commit_patterns([])
    assert by_day == {day: 0 for day in WEEKDAYS}
    assert by_hour == [0] * 24
