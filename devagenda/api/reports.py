"""Report endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from devagenda.api.deps import get_current_user, success
from devagenda.core import reporting
from devagenda.database import get_db
from devagenda.models.user import User

router = APIRouter()


@router.get("/weekly")
def generate_weekly_report(
    project_id: Optional[int] = Query(None, alias="projectId"),
    week_start: Optional[str] = Query(None, alias="weekStart"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Generate a report for the week containing weekStart (default this week)."""
    report = reporting.generate_weekly_report(db, current_user.id, project_id, week_start)
    return success(report.to_dict())


@router.get("/monthly")
def generate_monthly_report(
    project_id: Optional[int] = Query(None, alias="projectId"),
    month_start: Optional[str] = Query(None, alias="monthStart"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Generate a report for the month containing monthStart (default this month)."""
    report = reporting.generate_monthly_report(db, current_user.id, project_id, month_start)
    return success(report.to_dict())


@router.get("/")
def list_reports(
    report_type: Optional[str] = Query(None, alias="type"),
    project_id: Optional[int] = Query(None, alias="projectId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List reports, newest first."""
    reports = reporting.list_reports(db, current_user.id, report_type, project_id)
    return success([r.to_dict() for r in reports])


@router.get("/{report_id}")
def get_report(
    report_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get report by ID."""
    return success(reporting.get_report(db, report_id, current_user.id).to_dict())


@router.get("/{report_id}/html", response_class=HTMLResponse)
def get_report_html(
    report_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get report rendered as HTML."""
    report = reporting.get_report(db, report_id, current_user.id)
    return HTMLResponse(reporting.render_report_html(report))
