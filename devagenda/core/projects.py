"""Project CRUD scoped to the owning user."""

import logging
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from devagenda.core.errors import NotFoundError, ValidationError
from devagenda.models.project import Project, ProjectStatus

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "description", "status", "github_owner", "github_repo")


def parse_status(value) -> Optional[ProjectStatus]:
    """Convert a status value ('in-progress') or member name ('IN_PROGRESS') to the enum."""
    if value is None or value == "":
        return None
    if isinstance(value, ProjectStatus):
        return value
    try:
        return ProjectStatus(value)
    except ValueError:
        pass
    try:
        return ProjectStatus[str(value).upper().replace("-", "_")]
    except KeyError:
        allowed = ", ".join(s.value for s in ProjectStatus)
        raise ValidationError(f"Invalid status '{value}'. Expected one of: {allowed}")


def list_projects(db: Session, user_id: str, status=None) -> List[Project]:
    """User's projects, newest first, optionally filtered by status."""
    query = db.query(Project).filter(Project.user_id == user_id)
    status = parse_status(status)
    if status:
        query = query.filter(Project.status == status)
    return query.order_by(Project.created_at.desc(), Project.id.desc()).all()


def get_projects_by_status(db: Session, user_id: str) -> Dict[str, List[Project]]:
    """User's projects grouped into one list per status."""
    projects = list_projects(db, user_id)
    return {
        status.value.replace("-", "_"): [p for p in projects if p.status == status]
        for status in ProjectStatus
    }


def get_project(db: Session, project_id: int, user_id: str) -> Project:
    """Project by id, only if owned by the user."""
    project = (
        db.query(Project)
        .filter(Project.id == project_id, Project.user_id == user_id)
        .first()
    )
    if not project:
        raise NotFoundError("Project not found")
    return project


def _clean(data: Dict) -> Dict:
    values = {k: v for k, v in data.items() if k in EDITABLE_FIELDS}
    if "status" in values:
        status = parse_status(values.pop("status"))
        # null status leaves the stored (or default) status untouched
        if status is not None:
            values["status"] = status
    if "name" in values:
        name = (values["name"] or "").strip()
        if not name:
            raise ValidationError("Project name is required")
        values["name"] = name
    return values


def create_project(db: Session, user_id: str, data: Dict) -> Project:
    """Create a project owned by the user."""
    values = _clean(data)
    if "name" not in values:
        raise ValidationError("Project name is required")

    project = Project(user_id=user_id, **values)
    db.add(project)
    db.commit()
    db.refresh(project)
    logger.info(f"Created project {project.id} for user {user_id}")
    return project


def update_project(db: Session, project_id: int, user_id: str, data: Dict) -> Project:
    """Apply a partial update to an owned project."""
    project = get_project(db, project_id, user_id)
    for key, value in _clean(data).items():
        setattr(project, key, value)
    db.commit()
    db.refresh(project)
    return project


def delete_project(db: Session, project_id: int, user_id: str) -> None:
    """Delete an owned project together with its commits."""
    project = get_project(db, project_id, user_id)
    db.delete(project)
    db.commit()
    logger.info(f"Deleted project {project_id} for user {user_id}")
