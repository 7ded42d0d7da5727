from datetime import datetime
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ActivityRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    sha: str
    message: str = ""
    timestamp: datetime  # author date, keeps its UTC offset
    repo: str  # owner/name
    additions: int = 0
    deletions: int = 0

    @property
    def date_key(self) -> str:
        return self.timestamp.date().isoformat()


class RepoStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    commits: int = 0
    additions: int = 0
    deletions: int = 0
    languages: dict[str, int] = {}


class DayStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: str  # YYYY-MM-DD
    commits: int = 0
    additions: int = 0
    deletions: int = 0


class Collaborator(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str
    interactions: int


class StreakResult(BaseModel):
    longest_streak: int = 0
    current_streak: int = 0
    longest_start: Optional[str] = None
    longest_end: Optional[str] = None


class HeatmapDay(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: str
    commits: int
    level: Literal[0, 1, 2, 3, 4]


class HeatmapWeek(BaseModel):
    model_config = ConfigDict(frozen=True)

    days: list[HeatmapDay]  # Sunday first, always 7


class HeatmapData(BaseModel):
    model_config = ConfigDict(frozen=True)

    weeks: list[HeatmapWeek] = []
    max_commits: int = 0


class BiggestDay(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: str = ""
    commits: int = 0


class BiggestDeletion(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: str
    lines: int


class MetricChange(BaseModel):
    model_config = ConfigDict(frozen=True)

    current: int
    previous: int
    change: int  # percent


class YearComparison(BaseModel):
    model_config = ConfigDict(frozen=True)

    previous_year: int
    commits: MetricChange
    prs: MetricChange
    additions: MetricChange
    deletions: MetricChange
    repos: MetricChange
    streak: MetricChange


class Personality(str, Enum):
    NIGHT_OWL = "night-owl"
    EARLY_BIRD = "early-bird"
    WEEKEND_WARRIOR = "weekend-warrior"
    NINE_TO_FIVER = "nine-to-fiver"
    STREAK_MASTER = "streak-master"
    BUG_SQUASHER = "bug-squasher"
    FEATURE_FACTORY = "feature-factory"
    REVIEWER = "reviewer"
    POLYGLOT = "polyglot"
    FOCUSED = "focused"


class PersonalityInfo(BaseModel):
    emoji: str
    title: str
    description: str


PERSONALITIES: dict[Personality, PersonalityInfo] = {
    Personality.NIGHT_OWL: PersonalityInfo(
        emoji="🦉", title="Night Owl", description="Your best code comes after midnight"),
    Personality.EARLY_BIRD: PersonalityInfo(
        emoji="🌅", title="Early Bird", description="You catch the worm (and fix the bugs) at dawn"),
    Personality.WEEKEND_WARRIOR: PersonalityInfo(
        emoji="⚔️", title="Weekend Warrior", description="Saturdays are for coding, not sleeping in"),
    Personality.NINE_TO_FIVER: PersonalityInfo(
        emoji="💼", title="Nine-to-Fiver", description="Peak productivity during business hours"),
    Personality.STREAK_MASTER: PersonalityInfo(
        emoji="🔥", title="Streak Master", description="Consistency is your superpower"),
    Personality.BUG_SQUASHER: PersonalityInfo(
        emoji="🐛", title="Bug Squasher", description="You delete more than you add (and that's a good thing)"),
    Personality.FEATURE_FACTORY: PersonalityInfo(
        emoji="🏭", title="Feature Factory", description="Shipping features like there's no tomorrow"),
    Personality.REVIEWER: PersonalityInfo(
        emoji="👀", title="Code Guardian", description="No PR goes unreviewed on your watch"),
    Personality.POLYGLOT: PersonalityInfo(
        emoji="🌍", title="Polyglot", description="You speak many languages... programming languages"),
    Personality.FOCUSED: PersonalityInfo(
        emoji="🎯", title="Laser Focused", description="One repo, one mission, total dedication"),
}


class FunFact(BaseModel):
    model_config = ConfigDict(frozen=True)

    emoji: str
    text: str
    category: Literal["time", "code", "social", "quirky"]


class ActivitySnapshot(BaseModel):
    """Everything the fetch layer hands to the aggregator for one year."""

    username: str
    avatar_url: str = ""
    year: int
    repo: Optional[str] = None
    commits: list[ActivityRecord] = []
    pr_count: int = 0
    issue_count: int = 0
    review_count: int = 0
    repo_languages: dict[str, dict[str, int]] = {}  # repo -> language -> bytes
    collaborators: list[Collaborator] = []


class WrappedStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str
    avatar_url: str = ""
    year: int

    total_commits: int = 0
    total_prs: int = 0
    total_issues: int = 0
    total_reviews: int = 0
    total_additions: int = 0
    total_deletions: int = 0

    repos: list[RepoStats] = []
    most_active_repo: str = ""
    repo_count: int = 0

    commits_by_day: dict[str, int] = {}
    commits_by_hour: list[int] = Field(default_factory=lambda: [0] * 24)
    most_productive_day: str = ""
    most_productive_hour: int = 0

    longest_streak: int = 0
    current_streak: int = 0
    streak_start: Optional[str] = None
    streak_end: Optional[str] = None

    languages: dict[str, int] = {}
    top_language: str = "Unknown"

    collaborators: list[Collaborator] = []
    top_collaborator: Optional[str] = None

    personality: Personality = Personality.NINE_TO_FIVER
    biggest_day: BiggestDay = BiggestDay()
    biggest_deletion: Optional[BiggestDeletion] = None

    daily_commits: list[DayStats] = []
    heatmap: HeatmapData = HeatmapData()
    fun_facts: list[FunFact] = []
    year_comparison: Optional[YearComparison] = None
