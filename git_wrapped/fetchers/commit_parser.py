from datetime import datetime, timezone
from typing import Any, Optional

from git_wrapped.models import ActivityRecord


def parse_timestamp(value: str) -> datetime:
    """Parse a GitHub ISO-8601 timestamp; naive values are treated as UTC."""
    ts = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def parse_commit(
    payload: dict[str, Any],
    repo: str,
    detail: Optional[dict[str, Any]] = None,
    additions: int = 0,
    deletions: int = 0,
) -> Optional[ActivityRecord]:
    """Turn a `GET /repos/{owner}/{repo}/commits` item into an ActivityRecord.

    Line counts come from `detail` (the single-commit payload) when given,
    otherwise from the `additions`/`deletions` estimates. Returns None for
    items without an author or committer date.
    """
    commit = payload.get("commit") or {}
    author = commit.get("author") or commit.get("committer") or {}
    date = author.get("date")
    if not date:
        return None

    if detail is not None:
        stats = detail.get("stats") or {}
        additions = int(stats.get("additions", 0) or 0)
        deletions = int(stats.get("deletions", 0) or 0)

    return ActivityRecord(
        sha=payload.get("sha", ""),
        message=commit.get("message", "") or "",
        timestamp=parse_timestamp(date),
        repo=repo,
        additions=additions,
        deletions=deletions,
    )
