"""Database models."""

from devagenda.models.user import User
from devagenda.models.project import Project, ProjectStatus
from devagenda.models.commit import Commit
from devagenda.models.reflection import DailyReflection
from devagenda.models.report import Report, ReportType

__all__ = [
    "User",
    "Project",
    "ProjectStatus",
    "Commit",
    "DailyReflection",
    "Report",
    "ReportType",
]
