"""Daily reflections: one journal entry per user and day, with commit context."""

import logging
from typing import Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from devagenda.core.commits import get_day_commits
from devagenda.core.dates import DateLike, parse_date, today
from devagenda.core.errors import NotFoundError, ValidationError
from devagenda.models.reflection import DailyReflection

logger = logging.getLogger(__name__)


def _find(db: Session, user_id: str, day) -> Optional[DailyReflection]:
    return (
        db.query(DailyReflection)
        .filter(DailyReflection.user_id == user_id, DailyReflection.reflection_date == day)
        .first()
    )


def get_or_create_reflection(db: Session, user_id: str, day: DateLike = None) -> DailyReflection:
    """Reflection for the day, created with a commit snapshot on first access."""
    day = parse_date(day, default=today())

    existing = _find(db, user_id, day)
    if existing:
        return existing

    commits = get_day_commits(db, user_id, day)
    reflection = DailyReflection(
        user_id=user_id,
        reflection_date=day,
        commits_count=len(commits),
        projects_worked=len({c.project_id for c in commits}),
        content="",
        feeling="",
    )
    db.add(reflection)
    try:
        db.commit()
    except IntegrityError:
        # Lost the race against a concurrent first read
        db.rollback()
        return _find(db, user_id, day)
    db.refresh(reflection)
    logger.info(f"Created reflection for user {user_id} on {day}")
    return reflection


def update_reflection(
    db: Session,
    user_id: str,
    day: DateLike,
    content: Optional[str] = None,
    feeling: Optional[str] = None,
) -> DailyReflection:
    """Write the supplied fields of an existing reflection; snapshot counts are kept."""
    day = parse_date(day)
    if day is None:
        raise ValidationError("Date is required")

    reflection = _find(db, user_id, day)
    if not reflection:
        raise NotFoundError(f"No reflection for {day.isoformat()}")

    if content is not None:
        reflection.content = content
    if feeling is not None:
        reflection.feeling = feeling
    db.commit()
    db.refresh(reflection)
    return reflection


def get_reflection_with_commits(db: Session, user_id: str, day: DateLike = None) -> Dict:
    """Reflection plus a live view of the day's commits grouped by project.

    The live totals can differ from the reflection's stored snapshot when
    commits were synced after it was created.
    """
    day = parse_date(day, default=today())
    reflection = get_or_create_reflection(db, user_id, day)
    commits = get_day_commits(db, user_id, day)

    by_project: Dict[int, Dict] = {}
    for commit in commits:
        group = by_project.get(commit.project_id)
        if group is None:
            project = commit.project
            group = by_project[commit.project_id] = {
                "project": {
                    "id": project.id,
                    "name": project.name,
                    "github_repo": project.github_repo,
                },
                "commits": [],
            }
        group["commits"].append(commit.to_dict())

    return {
        "reflection": reflection.to_dict(),
        "commits": [c.to_dict() for c in commits],
        "commitsByProject": list(by_project.values()),
        "totalCommits": len(commits),
        "totalProjects": len(by_project),
    }
