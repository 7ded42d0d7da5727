"""Heuristic fun facts.

Every rule in RULES is evaluated against the same input; the matches are kept
in rule order and cut to MAX_FUN_FACTS, so earlier rules win when many fire.
"""
from dataclasses import dataclass, field
from typing import Callable, Optional

from git_wrapped.models import ActivityRecord, FunFact
from git_wrapped.utils.patterns import WEEKDAYS, WEEKEND

MAX_FUN_FACTS = 6
MESSAGE_SCAN_LIMIT = 100


@dataclass
class FunFactInput:
    by_day: dict[str, int] = field(default_factory=lambda: {d: 0 for d in WEEKDAYS})
    by_hour: list[int] = field(default_factory=lambda: [0] * 24)
    most_productive_hour: int = 0
    total_commits: int = 0
    total_additions: int = 0
    total_deletions: int = 0
    longest_streak: int = 0
    repo_count: int = 0
    languages: dict[str, int] = field(default_factory=dict)
    active_days: int = 0
    records: list[ActivityRecord] = field(default_factory=list)


def _peak_hour(s: FunFactInput) -> Optional[FunFact]:
    if s.total_commits == 0:
        return None
    hour = s.most_productive_hour
    if 0 <= hour <= 4:
        return FunFact(emoji="🌙", text=f"Your peak hour is {hour}:00. The rest of the world is asleep, you are shipping.", category="time")
    if 5 <= hour <= 8:
        return FunFact(emoji="🌅", text=f"Your peak hour is {hour}:00. Coffee and commits before standup.", category="time")
    if hour >= 20:
        return FunFact(emoji="🦉", text=f"Your peak hour is {hour}:00. Evenings are when the code flows.", category="time")
    return None


def _busiest_vs_quietest_day(s: FunFactInput) -> Optional[FunFact]:
    active = [(day, n) for day, n in s.by_day.items() if n > 0]
    if len(active) < 2:
        return None
    busiest = max(active, key=lambda item: item[1])
    quietest = min(active, key=lambda item: item[1])
    if busiest[1] < quietest[1] * 2:
        return None
    ratio = busiest[1] / quietest[1]
    return FunFact(emoji="📅", text=f"You commit {ratio:.1f}x more on {busiest[0]}s than on {quietest[0]}s.", category="time")


def _friday_vs_monday(s: FunFactInput) -> Optional[FunFact]:
    friday = s.by_day.get("Friday", 0)
    monday = s.by_day.get("Monday", 0)
    if friday <= 5 or monday == 0 or friday <= monday:
        return None
    pct = round((friday - monday) / monday * 100)
    return FunFact(emoji="🎉", text=f"You are {pct}% more productive on Fridays than Mondays. Friday deploys, anyone?", category="time")


def _weekend_share(s: FunFactInput) -> Optional[FunFact]:
    if s.total_commits == 0:
        return None
    weekend = sum(s.by_day.get(day, 0) for day in WEEKEND)
    share = weekend / s.total_commits
    if share <= 0.25:
        return None
    return FunFact(emoji="🏖️", text=f"{round(share * 100)}% of your commits landed on weekends. Rest is overrated?", category="time")


def _commit_size(s: FunFactInput) -> Optional[FunFact]:
    if s.total_commits == 0:
        return None
    avg = (s.total_additions + s.total_deletions) / s.total_commits
    if avg > 200:
        return FunFact(emoji="🐘", text=f"Your commits average {round(avg)} changed lines. You like big commits.", category="code")
    if avg < 20 and s.total_commits > 50:
        return FunFact(emoji="⚛️", text=f"Your commits average just {round(avg)} changed lines. Atomic commits, textbook style.", category="code")
    return None


def _deletions_dominate(s: FunFactInput) -> Optional[FunFact]:
    if s.total_deletions <= s.total_additions:
        return None
    net = s.total_deletions - s.total_additions
    return FunFact(emoji="🧹", text=f"You deleted {net:,} more lines than you added. The codebase is lighter thanks to you.", category="code")


def _streak(s: FunFactInput) -> Optional[FunFact]:
    if s.longest_streak >= 30:
        return FunFact(emoji="🔥", text=f"A {s.longest_streak}-day commit streak. That is a month of showing up.", category="quirky")
    elif s.longest_streak >= 14:
        return FunFact(emoji="📆", text=f"You kept a {s.longest_streak}-day streak going. Two weeks straight!", category="quirky")
    return None


def _repo_spread(s: FunFactInput) -> Optional[FunFact]:
    if s.repo_count == 1:
        return FunFact(emoji="🎯", text="Every single commit went to one repository. Total focus.", category="code")
    elif s.repo_count >= 10:
        return FunFact(emoji="🗂️", text=f"You spread your work across {s.repo_count} repositories.", category="code")
    return None


def _language_count(s: FunFactInput) -> Optional[FunFact]:
    if len(s.languages) < 5:
        return None
    return FunFact(emoji="🌍", text=f"You wrote code in {len(s.languages)} languages this year. A true polyglot.", category="code")


def _language_dominance(s: FunFactInput) -> Optional[FunFact]:
    total = sum(s.languages.values())
    if len(s.languages) < 2 or total == 0:
        return None
    # first language wins ties, matching top-language selection
    top, top_bytes = max(s.languages.items(), key=lambda item: item[1])
    share = top_bytes / total
    if share < 0.8:
        return None
    return FunFact(emoji="💘", text=f"{top} is {round(share * 100)}% of your code. You found the one.", category="code")


def _wip_messages(s: FunFactInput) -> Optional[FunFact]:
    count = 0
    for record in s.records[:MESSAGE_SCAN_LIMIT]:
        message = record.message.lower()
        if "wip" in message or "work in progress" in message:
            count += 1
    if count < 5:
        return None
    return FunFact(emoji="🚧", text=f"{count} of your commits were marked work in progress. Still in progress?", category="quirky")


def _fix_messages(s: FunFactInput) -> Optional[FunFact]:
    count = sum(1 for r in s.records[:MESSAGE_SCAN_LIMIT] if r.message.lower().startswith("fix"))
    if count < 10:
        return None
    return FunFact(emoji="🔧", text=f"{count} commit messages start with \"fix\". Somebody has to.", category="quirky")


def _midnight_commits(s: FunFactInput) -> Optional[FunFact]:
    count = s.by_hour[0] + s.by_hour[23]
    if count < 5:
        return None
    return FunFact(emoji="🕛", text=f"{count} commits landed within an hour of midnight.", category="time")


def _commits_per_day(s: FunFactInput) -> Optional[FunFact]:
    if s.active_days == 0:
        return None
    avg = s.total_commits / s.active_days
    if avg < 5:
        return None
    return FunFact(emoji="⚡", text=f"On days you code, you average {avg:.1f} commits.", category="quirky")


RULES: list[Callable[[FunFactInput], Optional[FunFact]]] = [
    _peak_hour,
    _busiest_vs_quietest_day,
    _friday_vs_monday,
    _weekend_share,
    _commit_size,
    _deletions_dominate,
    _streak,
    _repo_spread,
    _language_count,
    _language_dominance,
    _wip_messages,
    _fix_messages,
    _midnight_commits,
    _commits_per_day,
]


def generate_fun_facts(facts_input: FunFactInput) -> list[FunFact]:
    facts: list[FunFact] = []
    for rule in RULES:
        fact = rule(facts_input)
        if fact is not None:
            facts.append(fact)
    return facts[:MAX_FUN_FACTS]
