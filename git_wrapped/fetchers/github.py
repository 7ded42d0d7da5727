"""GitHub REST fetch layer.

Builds an ActivitySnapshot for one user and year. Requests run concurrently
under a shared semaphore; every slice except the user lookup fails soft to an
empty default so one broken repository or search never sinks the report.
In strict mode, used for the comparison year, a failed repository or commit
listing raises GitHubError instead.
"""
import asyncio
import logging
import os
from typing import Any, Optional

import httpx

from git_wrapped.fetchers.commit_parser import parse_commit
from git_wrapped.models import ActivityRecord, ActivitySnapshot, Collaborator
from git_wrapped.utils.retry import with_retry

_log = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
MAX_REPOS = 50
LANGUAGE_REPOS = 20
COMMIT_DETAIL_SAMPLE = 100
MAX_CONCURRENCY = 8
PER_PAGE = 100
EMPTY_REPO_STATUS = 409  # GitHub answers 409 when listing commits of an empty repository


class GitHubError(RuntimeError):
    """Raised when GitHub data the report cannot do without is unavailable."""


def _year_range(year: int) -> str:
    return f"{year}-01-01..{year}-12-31"


class GitHubFetcher:
    def __init__(
        self,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        *,
        client: Optional[httpx.AsyncClient] = None,
        max_concurrency: int = MAX_CONCURRENCY,
    ) -> None:
        headers = {"Accept": "application/vnd.github+json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url or os.getenv("GITHUB_API_URL", DEFAULT_API_URL),
            headers=headers,
            timeout=30,
        )
        self._semaphore = asyncio.Semaphore(max_concurrency)

    async def __aenter__(self) -> "GitHubFetcher":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ── HTTP helpers ─────────────────────────────────────────────────────────

    async def _get(self, url: str, params: Optional[dict[str, Any]] = None) -> httpx.Response:
        async def request() -> httpx.Response:
            # one slot per attempt, released before any backoff sleep
            async with self._semaphore:
                response = await self._client.get(url, params=params)
            response.raise_for_status()
            return response

        return await with_retry(request)

    async def _paginate(self, url: str, params: Optional[dict[str, Any]] = None, limit: Optional[int] = None) -> list[Any]:
        """Collect list pages by following the `Link: rel="next"` header."""
        items: list[Any] = []
        next_url: Optional[str] = url
        while next_url:
            response = await self._get(next_url, params=params)
            items.extend(response.json())
            if limit is not None and len(items) >= limit:
                return items[:limit]
            next_url = response.links.get("next", {}).get("url")
            params = None  # the next link already carries the query
        return items

    # ── Slices ───────────────────────────────────────────────────────────────

    async def get_user(self, username: Optional[str] = None) -> dict[str, Any]:
        url = f"/users/{username}" if username else "/user"
        try:
            return (await self._get(url)).json()
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 401:
                raise GitHubError("Bad credentials: check your GitHub token") from e
            if e.response.status_code == 404:
                raise GitHubError(f"GitHub user not found: {username}") from e
            raise GitHubError(f"Could not load GitHub user: {e}") from e
        except httpx.HTTPError as e:
            raise GitHubError(f"Could not reach GitHub: {e}") from e

    async def list_repos(self, username: str, strict: bool = False) -> list[str]:
        try:
            repos = await self._paginate(
                f"/users/{username}/repos", params={"per_page": PER_PAGE, "type": "all"}, limit=MAX_REPOS
            )
        except httpx.HTTPError as e:
            if strict:
                raise GitHubError(f"Could not list repositories for {username}: {e}") from e
            _log.warning("could not list repositories for %s: %s", username, e)
            return []
        return [r["full_name"] for r in repos if r.get("full_name")]

    async def _commit_detail(self, repo: str, sha: str) -> Optional[dict[str, Any]]:
        try:
            return (await self._get(f"/repos/{repo}/commits/{sha}")).json()
        except httpx.HTTPError as e:
            _log.debug("no stats for %s@%s: %s", repo, sha, e)
            return None

    async def repo_commits(self, repo: str, username: str, year: int, strict: bool = False) -> list[ActivityRecord]:
        """Commits by `username` in `repo` during `year`.

        Line counts are fetched for the first COMMIT_DETAIL_SAMPLE commits; the
        rest get the sample's mean, rounded. With `strict`, a failed listing
        raises GitHubError instead of yielding no commits.
        """
        try:
            items = await self._paginate(f"/repos/{repo}/commits", params={
                "author": username,
                "since": f"{year}-01-01T00:00:00Z",
                "until": f"{year}-12-31T23:59:59Z",
                "per_page": PER_PAGE,
            })
        except httpx.HTTPError as e:
            if isinstance(e, httpx.HTTPStatusError) and e.response.status_code == EMPTY_REPO_STATUS:
                return []
            if strict:
                raise GitHubError(f"Could not list commits for {repo}: {e}") from e
            _log.warning("skipping %s: %s", repo, e)
            return []

        sampled = items[:COMMIT_DETAIL_SAMPLE]
        details = await asyncio.gather(*(self._commit_detail(repo, c.get("sha", "")) for c in sampled))
        records: list[ActivityRecord] = []
        for item, detail in zip(sampled, details):
            # a failed detail lookup counts as zero changed lines
            record = parse_commit(item, repo, detail if detail is not None else {})
            if record is not None:
                records.append(record)

        rest = items[len(sampled):]
        if rest and records:
            avg_additions = round(sum(r.additions for r in records) / len(sampled))
            avg_deletions = round(sum(r.deletions for r in records) / len(sampled))
        else:
            avg_additions = avg_deletions = 0
        for item in rest:
            record = parse_commit(item, repo, additions=avg_additions, deletions=avg_deletions)
            if record is not None:
                records.append(record)
        return records

    async def search_count(self, query: str) -> int:
        try:
            data = (await self._get("/search/issues", params={"q": query, "per_page": PER_PAGE})).json()
        except httpx.HTTPError as e:
            _log.warning("search %r failed: %s", query, e)
            return 0
        return int(data.get("total_count", len(data.get("items", []))))

    async def collaborators(self, username: str, year: int) -> list[Collaborator]:
        """PR authors the user interacted with, most interactions first."""
        query = f"involves:{username} type:pr created:{_year_range(year)}"
        try:
            data = (await self._get("/search/issues", params={"q": query, "per_page": PER_PAGE})).json()
        except httpx.HTTPError as e:
            _log.warning("collaborator search failed: %s", e)
            return []

        counts: dict[str, int] = {}
        for item in data.get("items", []):
            author = (item.get("user") or {}).get("login")
            if author and author != username:
                counts[author] = counts.get(author, 0) + 1
        ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
        return [Collaborator(username=name, interactions=n) for name, n in ranked]

    async def languages(self, repo: str) -> dict[str, int]:
        try:
            return (await self._get(f"/repos/{repo}/languages")).json()
        except httpx.HTTPError as e:
            _log.warning("no language data for %s: %s", repo, e)
            return {}

    # ── Snapshot ─────────────────────────────────────────────────────────────

    async def _all_commits(self, repos: list[str], username: str, year: int, strict: bool = False) -> list[ActivityRecord]:
        # let every repo finish before a strict failure propagates
        per_repo = await asyncio.gather(
            *(self.repo_commits(r, username, year, strict=strict) for r in repos), return_exceptions=True
        )
        for result in per_repo:
            if isinstance(result, BaseException):
                raise result
        return [record for records in per_repo for record in records]

    async def fetch_snapshot(
        self, username: Optional[str], year: int, repo: Optional[str] = None, *, strict: bool = False
    ) -> ActivitySnapshot:
        """Fetch everything the aggregator needs for one user and year.

        Raises GitHubError when the user itself cannot be loaded. With `strict`,
        a failed repository or commit listing raises too, so callers never get a
        snapshot whose commit history is silently incomplete.
        """
        user = await self.get_user(username)
        login = user["login"]
        repos = [repo] if repo else await self.list_repos(login, strict=strict)
        scope = f" repo:{repo}" if repo else ""
        span = _year_range(year)

        results = await asyncio.gather(
            self._all_commits(repos, login, year, strict=strict),
            self.search_count(f"author:{login} type:pr created:{span}{scope}"),
            self.search_count(f"author:{login} type:issue created:{span}{scope}"),
            self.search_count(f"reviewed-by:{login} type:pr created:{span}{scope}"),
            self.collaborators(login, year),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        commits, pr_count, issue_count, review_count, collaborators = results

        active_repos = list(dict.fromkeys(c.repo for c in commits))[:LANGUAGE_REPOS]
        language_maps = await asyncio.gather(*(self.languages(r) for r in active_repos))

        return ActivitySnapshot(
            username=login,
            avatar_url=user.get("avatar_url", "") or "",
            year=year,
            repo=repo,
            commits=commits,
            pr_count=pr_count,
            issue_count=issue_count,
            review_count=review_count,
            repo_languages=dict(zip(active_repos, language_maps)),
            collaborators=collaborators,
        )

    async def fetch_previous_snapshot(
        self, username: Optional[str], year: int, repo: Optional[str] = None
    ) -> Optional[ActivitySnapshot]:
        """Snapshot for `year - 1`, or None when its commit history cannot be fetched in full."""
        try:
            return await self.fetch_snapshot(username, year - 1, repo, strict=True)
        except (GitHubError, httpx.HTTPError) as e:
            _log.warning("no data for %s, skipping year comparison: %s", year - 1, e)
            return None
