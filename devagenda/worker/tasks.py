"""Celery tasks for commit sync and scheduled reports."""

import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy.orm import Session

from devagenda.core.dates import parse_date, today
from devagenda.core.errors import DevAgendaError
from devagenda.core.reporting import generate_weekly_report
from devagenda.core.sync import sync_project_commits
from devagenda.database import SessionLocal
from devagenda.models.project import Project, ProjectStatus
from devagenda.models.user import User
from devagenda.providers.github import GitHubProvider
from devagenda.worker.celery_app import celery_app

logger = logging.getLogger(__name__)


def get_db() -> Session:
    """Get database session."""
    return SessionLocal()


@celery_app.task
def sync_project_commits_task(project_id: int) -> int:
    """Sync one project with its owner's GitHub token."""
    db = get_db()
    try:
        project = db.query(Project).filter(Project.id == project_id).first()
        if not project:
            logger.warning(f"Project {project_id} not found")
            return 0
        token = project.user.github_token
        if not token:
            logger.warning(f"Owner of project {project_id} has no GitHub token")
            return 0
        return sync_project_commits(db, project, GitHubProvider(token))
    finally:
        db.close()


@celery_app.task
def sync_active_projects() -> int:
    """Queue a sync for every in-progress project with a linked repository."""
    db = get_db()
    try:
        projects = (
            db.query(Project)
            .join(User, Project.user_id == User.id)
            .filter(
                Project.status == ProjectStatus.IN_PROGRESS,
                Project.github_owner.isnot(None),
                Project.github_repo.isnot(None),
                User.github_token.isnot(None),
            )
            .all()
        )
        for project in projects:
            sync_project_commits_task.delay(project.id)
        logger.info(f"Queued sync for {len(projects)} projects")
        return len(projects)
    finally:
        db.close()


@celery_app.task
def generate_weekly_reports(reference_date: Optional[str] = None) -> int:
    """Weekly report of the previous week for every user with projects."""
    reference = parse_date(reference_date, default=today() - timedelta(days=7))
    db = get_db()
    generated = 0
    try:
        user_ids = [row[0] for row in db.query(Project.user_id).distinct().all()]
        for user_id in user_ids:
            try:
                generate_weekly_report(db, user_id, reference=reference)
                generated += 1
            except DevAgendaError as e:
                logger.error(f"Weekly report failed for user {user_id}: {e}")
                db.rollback()
        logger.info(f"Generated {generated} weekly reports for week of {reference}")
        return generated
    finally:
        db.close()
