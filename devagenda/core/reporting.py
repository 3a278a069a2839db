"""Weekly and monthly commit reports."""

import logging
from datetime import date, datetime
from typing import Dict, List, Optional

from jinja2 import Template
from sqlalchemy.orm import Session

from devagenda.config import settings
from devagenda.core.dates import DateLike, format_long, month_range, parse_date, range_bounds, today, week_range
from devagenda.core.errors import NotFoundError, ValidationError
from devagenda.models.commit import Commit
from devagenda.models.project import Project
from devagenda.models.report import Report, ReportType

logger = logging.getLogger(__name__)


REPORT_TEMPLATE = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <title>{{ app_name }} {{ report.report_type.value|capitalize }} Report - {{ period.startFormatted }}</title>
    <style>
        body { font-family: Arial, sans-serif; margin: 20px; }
        h1 { color: #333; }
        h2 { color: #666; border-bottom: 2px solid #ddd; padding-bottom: 5px; }
        .summary { background: #f5f5f5; padding: 15px; margin: 20px 0; border-radius: 5px; }
        .stats { display: flex; gap: 20px; margin: 20px 0; }
        .stat-box { flex: 1; padding: 15px; background: white; border: 1px solid #ddd; border-radius: 5px; }
        .stat-number { font-size: 2em; font-weight: bold; }
        .stat-label { color: #666; }
        .project-section { margin: 30px 0; }
        .commit-item { margin: 8px 0; padding: 6px 10px; border-left: 3px solid #ddd; }
        .sha { font-family: monospace; color: #555; }
        .additions { color: #388e3c; }
        .deletions { color: #d32f2f; }
    </style>
</head>
<body>
    <h1>{{ report.report_type.value|capitalize }} Report</h1>
    <p><strong>Period:</strong> {{ period.startFormatted }} - {{ period.endFormatted }}</p>
    <p><strong>Generated:</strong> {{ generated_at }}</p>

    <div class="summary">
        <h2>Summary</h2>
        <div class="stats">
            <div class="stat-box">
                <div class="stat-number">{{ stats.totalCommits }}</div>
                <div class="stat-label">Commits</div>
            </div>
            <div class="stat-box">
                <div class="stat-number additions">+{{ stats.totalAdditions }}</div>
                <div class="stat-label">Additions</div>
            </div>
            <div class="stat-box">
                <div class="stat-number deletions">-{{ stats.totalDeletions }}</div>
                <div class="stat-label">Deletions</div>
            </div>
            <div class="stat-box">
                <div class="stat-number">{{ stats.projectsCount }}</div>
                <div class="stat-label">Projects</div>
            </div>
        </div>
    </div>

    <h2>Projects</h2>
    {% for project in stats.projects %}
    <div class="project-section">
        <h3>{{ project.name }} <small>({{ project.status }})</small></h3>
        <p>
            {{ project.commits }} commits |
            <span class="additions">+{{ project.additions }}</span> |
            <span class="deletions">-{{ project.deletions }}</span>
        </p>
        {% for commit in project.commitsList %}
        <div class="commit-item">
            <span class="sha">{{ commit.sha }}</span> {{ commit.message }}
            <small>{{ commit.date }} (+{{ commit.additions or 0 }} / -{{ commit.deletions or 0 }})</small>
        </div>
        {% else %}
        <p>No commits in this period.</p>
        {% endfor %}
    </div>
    {% else %}
    <p>No projects in scope.</p>
    {% endfor %}
</body>
</html>
"""


def parse_report_type(value) -> ReportType:
    try:
        return value if isinstance(value, ReportType) else ReportType(value)
    except ValueError:
        allowed = ", ".join(t.value for t in ReportType)
        raise ValidationError(f"Invalid report type '{value}'. Expected one of: {allowed}")


def build_statistics(projects: List[Project], commits: List[Commit]) -> Dict:
    """Totals and per-project breakdown for the given commits."""
    by_project: Dict[int, List[Commit]] = {p.id: [] for p in projects}
    for commit in commits:
        if commit.project_id in by_project:
            by_project[commit.project_id].append(commit)

    breakdown = []
    for project in projects:
        project_commits = by_project[project.id]
        breakdown.append(
            {
                "id": project.id,
                "name": project.name,
                "status": project.status.value if project.status else None,
                "commits": len(project_commits),
                "additions": sum(c.additions or 0 for c in project_commits),
                "deletions": sum(c.deletions or 0 for c in project_commits),
                "commitsList": [
                    {
                        "sha": c.sha[:7],
                        "message": c.message,
                        "date": c.commit_date.isoformat(),
                        "additions": c.additions,
                        "deletions": c.deletions,
                    }
                    for c in project_commits
                ],
            }
        )

    return {
        "totalCommits": len(commits),
        "totalAdditions": sum(c.additions or 0 for c in commits),
        "totalDeletions": sum(c.deletions or 0 for c in commits),
        "projectsCount": len(projects),
        "projects": breakdown,
    }


def build_period(start: date, end: date) -> Dict:
    return {
        "start": start.isoformat(),
        "end": end.isoformat(),
        "startFormatted": format_long(start),
        "endFormatted": format_long(end),
    }


def generate_report(
    db: Session,
    user_id: str,
    report_type,
    start: date,
    end: date,
    project_id: Optional[int] = None,
) -> Report:
    """Aggregate commits in [start, end] and persist a new report.

    An empty project scope still produces (and stores) a zeroed report.
    """
    report_type = parse_report_type(report_type)
    if end < start:
        raise ValidationError("Report end date is before start date")

    query = db.query(Project).filter(Project.user_id == user_id)
    if project_id:
        query = query.filter(Project.id == project_id)
    projects = query.order_by(Project.id).all()

    commits: List[Commit] = []
    if projects:
        start_at, end_at = range_bounds(start, end)
        commits = (
            db.query(Commit)
            .filter(
                Commit.project_id.in_([p.id for p in projects]),
                Commit.commit_date >= start_at,
                Commit.commit_date <= end_at,
            )
            .order_by(Commit.commit_date.desc())
            .all()
        )

    stats = build_statistics(projects, commits)
    content = {
        "period": build_period(start, end),
        "statistics": stats,
        "generatedAt": datetime.utcnow().isoformat() + "Z",
    }

    report = Report(
        user_id=user_id,
        project_id=project_id if projects else None,
        report_type=report_type,
        start_date=start,
        end_date=end,
        total_commits=stats["totalCommits"],
        total_additions=stats["totalAdditions"],
        total_deletions=stats["totalDeletions"],
        projects_count=stats["projectsCount"],
        content=content,
    )
    db.add(report)
    db.commit()
    db.refresh(report)

    logger.info(
        f"Generated {report_type.value} report {report.id} for user {user_id} "
        f"({start} - {end}): {stats['totalCommits']} commits"
    )
    return report


def generate_weekly_report(
    db: Session, user_id: str, project_id: Optional[int] = None, reference: DateLike = None
) -> Report:
    """Report for the Monday-Sunday week containing reference (default today)."""
    start, end = week_range(parse_date(reference, default=today()))
    return generate_report(db, user_id, ReportType.WEEKLY, start, end, project_id)


def generate_monthly_report(
    db: Session, user_id: str, project_id: Optional[int] = None, reference: DateLike = None
) -> Report:
    """Report for the calendar month containing reference (default today)."""
    start, end = month_range(parse_date(reference, default=today()))
    return generate_report(db, user_id, ReportType.MONTHLY, start, end, project_id)


def list_reports(
    db: Session, user_id: str, report_type=None, project_id: Optional[int] = None
) -> List[Report]:
    """User's reports, newest first."""
    query = db.query(Report).filter(Report.user_id == user_id)
    if report_type:
        query = query.filter(Report.report_type == parse_report_type(report_type))
    if project_id:
        query = query.filter(Report.project_id == project_id)
    return query.order_by(Report.created_at.desc(), Report.id.desc()).all()


def get_report(db: Session, report_id: int, user_id: str) -> Report:
    report = db.query(Report).filter(Report.id == report_id, Report.user_id == user_id).first()
    if not report:
        raise NotFoundError("Report not found")
    return report


def render_report_html(report: Report) -> str:
    """Render a stored report payload as a standalone HTML page."""
    content = report.content or {}
    template = Template(REPORT_TEMPLATE, autoescape=True)
    return template.render(
        app_name=settings.app_name,
        report=report,
        period=content.get("period", {}),
        stats=content.get("statistics", {}),
        generated_at=content.get("generatedAt", ""),
    )
