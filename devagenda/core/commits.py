"""Commit queries and day grouping."""

import logging
from datetime import date
from typing import Dict, Iterable, List

from sqlalchemy.orm import Session, contains_eager

from devagenda.core.dates import DateLike, day_bounds, format_display, parse_bound, to_local_date
from devagenda.core.projects import get_project
from devagenda.models.commit import Commit
from devagenda.models.project import Project, ProjectStatus

logger = logging.getLogger(__name__)


def get_project_commits(
    db: Session,
    project_id: int,
    user_id: str,
    start: DateLike = None,
    end: DateLike = None,
) -> List[Commit]:
    """Commits of an owned project, newest first, within optional inclusive bounds."""
    get_project(db, project_id, user_id)

    query = db.query(Commit).filter(Commit.project_id == project_id)
    start_at = parse_bound(start)
    end_at = parse_bound(end, end=True)
    if start_at:
        query = query.filter(Commit.commit_date >= start_at)
    if end_at:
        query = query.filter(Commit.commit_date <= end_at)
    return query.order_by(Commit.commit_date.desc()).all()


def group_commits_by_day(commits: Iterable[Commit]) -> List[Dict]:
    """Bucket commits by local calendar day, newest day first."""
    grouped: Dict[date, Dict] = {}
    for commit in commits:
        day = to_local_date(commit.commit_date)
        bucket = grouped.get(day)
        if bucket is None:
            bucket = grouped[day] = {
                "date": day.isoformat(),
                "displayDate": format_display(day),
                "commits": [],
                "totalAdditions": 0,
                "totalDeletions": 0,
                "totalFiles": 0,
            }
        bucket["commits"].append(commit.to_dict())
        bucket["totalAdditions"] += commit.additions or 0
        bucket["totalDeletions"] += commit.deletions or 0
        bucket["totalFiles"] += commit.files_changed or 0

    return [grouped[day] for day in sorted(grouped, reverse=True)]


def get_commits_by_day(
    db: Session,
    project_id: int,
    user_id: str,
    start: DateLike = None,
    end: DateLike = None,
) -> List[Dict]:
    return group_commits_by_day(get_project_commits(db, project_id, user_id, start, end))


def get_project_stats(db: Session, project_id: int, user_id: str) -> Dict:
    """Lifetime totals of an owned project."""
    commits = get_project_commits(db, project_id, user_id)
    return {
        "totalCommits": len(commits),
        "totalAdditions": sum(c.additions or 0 for c in commits),
        "totalDeletions": sum(c.deletions or 0 for c in commits),
        "totalFiles": sum(c.files_changed or 0 for c in commits),
        "firstCommit": commits[-1].commit_date.isoformat() if commits else None,
        "lastCommit": commits[0].commit_date.isoformat() if commits else None,
    }


def get_day_commits(db: Session, user_id: str, day: date) -> List[Commit]:
    """Commits made on a calendar day across the user's in-progress projects."""
    start_at, end_at = day_bounds(day)
    return (
        db.query(Commit)
        .join(Commit.project)
        .options(contains_eager(Commit.project))
        .filter(
            Project.user_id == user_id,
            Project.status == ProjectStatus.IN_PROGRESS,
            Commit.commit_date >= start_at,
            Commit.commit_date <= end_at,
        )
        .order_by(Commit.commit_date.desc())
        .all()
    )
