"""GitHub REST API provider."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import httpx
from dateutil.parser import isoparse

from devagenda.config import settings
from devagenda.core.dates import to_utc_naive
from devagenda.core.errors import UpstreamError
from devagenda.providers.base import (
    CommitStats,
    Profile,
    RemoteCommit,
    Repository,
    SourceControlProvider,
)

logger = logging.getLogger(__name__)


class GitHubProvider(SourceControlProvider):
    """GitHub REST API v3 provider authenticated with a personal token."""

    def __init__(
        self,
        token: str,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        super().__init__("github")
        self.token = token
        self.base_url = base_url or settings.github_api_url
        self.timeout = timeout if timeout is not None else settings.github_timeout
        self.transport = transport
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "User-Agent": settings.github_user_agent,
        }

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET a JSON resource, mapping every failure to UpstreamError."""
        try:
            with httpx.Client(
                base_url=self.base_url,
                headers=self.headers,
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                response = client.get(path, params=params)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"GitHub API {path} returned {e.response.status_code}")
            raise UpstreamError(f"GitHub API error {e.response.status_code} for {path}")
        except httpx.HTTPError as e:
            logger.error(f"GitHub API {path} request failed: {e}")
            raise UpstreamError(f"GitHub API request failed for {path}: {e}")
        except ValueError as e:
            logger.error(f"GitHub API {path} returned invalid JSON: {e}")
            raise UpstreamError(f"GitHub API returned invalid JSON for {path}")

    def list_repositories(self) -> List[Repository]:
        """Repositories of the authenticated user, most recently updated first."""
        data = self._get(
            "/user/repos",
            params={"per_page": 100, "sort": "updated", "direction": "desc"},
        )
        return [
            Repository(
                id=item["id"],
                name=item["name"],
                full_name=item.get("full_name", ""),
                owner=(item.get("owner") or {}).get("login", ""),
                description=item.get("description"),
                private=bool(item.get("private")),
                url=item.get("html_url", ""),
                updated_at=item.get("updated_at"),
            )
            for item in data
        ]

    def list_commits(
        self,
        owner: str,
        repo: str,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
    ) -> List[RemoteCommit]:
        """First page of commits of a repository within [since, until]."""
        params: Dict[str, Any] = {"per_page": settings.sync_page_size}
        if since:
            params["since"] = to_utc_naive(since).isoformat() + "Z"
        if until:
            params["until"] = to_utc_naive(until).isoformat() + "Z"

        data = self._get(f"/repos/{owner}/{repo}/commits", params=params)

        commits = []
        for item in data:
            details = item.get("commit") or {}
            author = details.get("author") or {}
            commits.append(
                RemoteCommit(
                    sha=item["sha"],
                    message=details.get("message", ""),
                    author_name=author.get("name"),
                    author_email=author.get("email"),
                    date=to_utc_naive(isoparse(author["date"])),
                    url=item.get("html_url"),
                )
            )
        return commits

    def get_commit_stats(self, owner: str, repo: str, sha: str) -> CommitStats:
        """Diff statistics for one commit."""
        data = self._get(f"/repos/{owner}/{repo}/commits/{sha}")
        stats = data.get("stats") or {}
        return CommitStats(
            additions=stats.get("additions") or 0,
            deletions=stats.get("deletions") or 0,
            files_changed=len(data.get("files") or []),
        )

    def get_profile(self) -> Profile:
        """Profile of the token owner."""
        data = self._get("/user")
        return Profile(
            id=data["id"],
            login=data["login"],
            name=data.get("name"),
            email=data.get("email"),
            avatar_url=data.get("avatar_url"),
            bio=data.get("bio"),
        )
