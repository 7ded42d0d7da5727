"""Rule chain mapping aggregate activity to a single developer personality.

Rules are checked in order and the first match wins, so a developer who is
both a night owl and a polyglot is classified as a night owl.
"""
from dataclasses import dataclass, field
from typing import Callable

from git_wrapped.models import Personality

NIGHT_HOURS = (22, 23, 0, 1, 2, 3)
MORNING_HOURS = range(5, 9)
WORK_HOURS = range(9, 17)

NIGHT_SHARE = 0.3
MORNING_SHARE = 0.3
WEEKEND_TO_WEEKDAY = 0.4
STREAK_DAYS = 30
DELETION_TO_ADDITION = 0.8
ADDITION_TO_DELETION = 3
REVIEW_SHARE = 0.3
POLYGLOT_LANGUAGES = 5
WORK_HOURS_SHARE = 0.5


@dataclass
class PersonalitySignals:
    by_day: dict[str, int] = field(default_factory=dict)
    by_hour: list[int] = field(default_factory=lambda: [0] * 24)
    longest_streak: int = 0
    total_additions: int = 0
    total_deletions: int = 0
    review_count: int = 0
    language_count: int = 0
    repo_count: int = 0

    @property
    def total_commits(self) -> int:
        return sum(self.by_hour)

    def commits_in(self, hours) -> int:
        return sum(self.by_hour[h] for h in hours)

    @property
    def weekend_commits(self) -> int:
        return self.by_day.get("Saturday", 0) + self.by_day.get("Sunday", 0)

    @property
    def weekday_commits(self) -> int:
        return sum(self.by_day.values()) - self.weekend_commits


Rule = tuple[Personality, Callable[[PersonalitySignals], bool]]

# Strict ">" everywhere, so an all-zero input never matches a ratio rule.
RULES: list[Rule] = [
    (Personality.NIGHT_OWL, lambda s: s.commits_in(NIGHT_HOURS) > s.total_commits * NIGHT_SHARE),
    (Personality.EARLY_BIRD, lambda s: s.commits_in(MORNING_HOURS) > s.total_commits * MORNING_SHARE),
    (Personality.WEEKEND_WARRIOR, lambda s: s.weekend_commits > s.weekday_commits * WEEKEND_TO_WEEKDAY),
    (Personality.STREAK_MASTER, lambda s: s.longest_streak >= STREAK_DAYS),
    (Personality.BUG_SQUASHER, lambda s: s.total_deletions > s.total_additions * DELETION_TO_ADDITION),
    (Personality.FEATURE_FACTORY, lambda s: s.total_additions > s.total_deletions * ADDITION_TO_DELETION),
    (Personality.REVIEWER, lambda s: s.review_count > s.total_commits * REVIEW_SHARE),
    (Personality.POLYGLOT, lambda s: s.language_count >= POLYGLOT_LANGUAGES),
    (Personality.FOCUSED, lambda s: s.repo_count == 1),
    (Personality.NINE_TO_FIVER, lambda s: s.commits_in(WORK_HOURS) > s.total_commits * WORK_HOURS_SHARE),
]


def classify_personality(signals: PersonalitySignals) -> Personality:
    for personality, matches in RULES:
        if matches(signals):
            return personality
    return Personality.NINE_TO_FIVER
