"""Commit sync: pull recent commits from GitHub and upsert them per project."""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from devagenda.config import settings
from devagenda.core.errors import ValidationError
from devagenda.core.projects import get_project
from devagenda.core.users import require_github_token
from devagenda.models.commit import Commit
from devagenda.models.project import Project
from devagenda.models.user import User
from devagenda.providers.base import CommitStats, RemoteCommit, SourceControlProvider
from devagenda.providers.github import GitHubProvider

logger = logging.getLogger(__name__)

UPDATABLE_COLUMNS = (
    "message",
    "author_name",
    "author_email",
    "commit_date",
    "url",
    "additions",
    "deletions",
    "files_changed",
    "updated_at",
)


def _fetch_stats(
    provider: SourceControlProvider, owner: str, repo: str, sha: str
) -> CommitStats:
    """Diff stats for one commit; a failure yields zeroed stats instead of aborting."""
    try:
        return provider.get_commit_stats(owner, repo, sha)
    except Exception as e:
        logger.warning(f"Stats unavailable for {owner}/{repo}@{sha[:7]}, recording zeros: {e}")
        return CommitStats()


def _fetch_all_stats(
    provider: SourceControlProvider,
    owner: str,
    repo: str,
    commits: List[RemoteCommit],
    max_workers: int,
) -> List[CommitStats]:
    """Stats for every commit, in commit order."""
    if max_workers <= 1 or len(commits) <= 1:
        return [_fetch_stats(provider, owner, repo, c.sha) for c in commits]

    # _fetch_stats never raises, so one failure cannot cancel its siblings
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = [pool.submit(_fetch_stats, provider, owner, repo, c.sha) for c in commits]
        return [f.result() for f in futures]


def _build_rows(project_id: int, commits: List[RemoteCommit], stats: List[CommitStats]) -> List[Dict]:
    now = datetime.utcnow()
    return [
        {
            "project_id": project_id,
            "sha": commit.sha,
            "message": commit.message,
            "author_name": commit.author_name,
            "author_email": commit.author_email,
            "commit_date": commit.date,
            "url": commit.url,
            "additions": stat.additions,
            "deletions": stat.deletions,
            "files_changed": stat.files_changed,
            "created_at": now,
            "updated_at": now,
        }
        for commit, stat in zip(commits, stats)
    ]


def upsert_commits(db: Session, rows: List[Dict]) -> None:
    """Insert commits, overwriting existing rows with the same (project_id, sha)."""
    if not rows:
        return

    dialect = db.get_bind().dialect.name
    if dialect in ("postgresql", "sqlite"):
        insert = postgresql.insert if dialect == "postgresql" else sqlite.insert
        stmt = insert(Commit).values(rows)
        stmt = stmt.on_conflict_do_update(
            index_elements=["project_id", "sha"],
            set_={col: stmt.excluded[col] for col in UPDATABLE_COLUMNS},
        )
        db.execute(stmt)
    else:
        for row in rows:
            existing = (
                db.query(Commit)
                .filter(Commit.project_id == row["project_id"], Commit.sha == row["sha"])
                .first()
            )
            if existing:
                for col in UPDATABLE_COLUMNS:
                    setattr(existing, col, row[col])
            else:
                db.add(Commit(**row))
    db.commit()


def sync_project_commits(
    db: Session,
    project: Project,
    provider: SourceControlProvider,
    now: Optional[datetime] = None,
    max_workers: Optional[int] = None,
) -> int:
    """Fetch commits from the last SYNC_LOOKBACK_DAYS and upsert them.

    Only the first page (SYNC_PAGE_SIZE commits) is fetched. A failure listing
    commits propagates; a failure fetching one commit's stats records that
    commit with zero counters. Returns the number of commits processed.
    """
    if not project.has_repository:
        raise ValidationError("Project does not have GitHub repository configured")

    owner, repo = project.github_owner, project.github_repo
    since = (now or datetime.utcnow()) - timedelta(days=settings.sync_lookback_days)
    workers = settings.sync_max_workers if max_workers is None else max_workers

    logger.info(f"Syncing {owner}/{repo} into project {project.id} since {since.isoformat()}")
    commits = provider.list_commits(owner, repo, since=since)
    if not commits:
        logger.info(f"No commits to sync for {owner}/{repo}")
        return 0

    stats = _fetch_all_stats(provider, owner, repo, commits, workers)
    upsert_commits(db, _build_rows(project.id, commits, stats))

    logger.info(f"Synced {len(commits)} commits for project {project.id}")
    return len(commits)


def sync_project(
    db: Session,
    user: User,
    project_id: int,
    provider_factory: Callable[[str], SourceControlProvider] = GitHubProvider,
) -> int:
    """Sync an owned project using the user's linked GitHub token."""
    token = require_github_token(user)
    project = get_project(db, project_id, user.id)
    return sync_project_commits(db, project, provider_factory(token))
