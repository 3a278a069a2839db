"""Project endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from devagenda.api.deps import get_current_user, success
from devagenda.core import commits as commit_service
from devagenda.core import projects as project_service
from devagenda.core.sync import sync_project
from devagenda.database import get_db
from devagenda.models.user import User

router = APIRouter()


class ProjectCreate(BaseModel):
    """Project create schema."""

    name: str
    description: Optional[str] = None
    status: Optional[str] = None
    github_owner: Optional[str] = None
    github_repo: Optional[str] = None


class ProjectUpdate(BaseModel):
    """Project update schema."""

    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    github_owner: Optional[str] = None
    github_repo: Optional[str] = None


@router.get("/")
def list_projects(
    status: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List the caller's projects."""
    projects = project_service.list_projects(db, current_user.id, status)
    return success([p.to_dict() for p in projects])


@router.get("/by-status")
def list_projects_by_status(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Projects grouped by status."""
    grouped = project_service.get_projects_by_status(db, current_user.id)
    return success({key: [p.to_dict() for p in items] for key, items in grouped.items()})


@router.get("/{project_id}")
def get_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get project by ID."""
    return success(project_service.get_project(db, project_id, current_user.id).to_dict())


@router.post("/", status_code=201)
def create_project(
    project_data: ProjectCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Create new project."""
    data = project_data.model_dump(exclude_unset=True)
    project = project_service.create_project(db, current_user.id, data)
    return success(project.to_dict())


@router.put("/{project_id}")
def update_project(
    project_id: int,
    project_data: ProjectUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update project."""
    data = project_data.model_dump(exclude_unset=True)
    project = project_service.update_project(db, project_id, current_user.id, data)
    return success(project.to_dict())


@router.delete("/{project_id}")
def delete_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete project."""
    project_service.delete_project(db, project_id, current_user.id)
    return success(message="Project deleted successfully")


@router.post("/{project_id}/sync")
def sync_project_commits(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Pull recent commits from the linked GitHub repository."""
    count = sync_project(db, current_user, project_id)
    return success({"commitsCount": count}, message=f"Synced {count} commits")


@router.get("/{project_id}/commits")
def get_project_commits(
    project_id: int,
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    group_by: Optional[str] = Query(None, alias="groupBy"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Commits of a project, flat or grouped by day."""
    if group_by == "day":
        return success(
            commit_service.get_commits_by_day(db, project_id, current_user.id, start_date, end_date)
        )
    commits = commit_service.get_project_commits(db, project_id, current_user.id, start_date, end_date)
    return success([c.to_dict() for c in commits])


@router.get("/{project_id}/stats")
def get_project_stats(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Lifetime commit statistics of a project."""
    return success(commit_service.get_project_stats(db, project_id, current_user.id))
