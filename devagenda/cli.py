"""CLI utilities."""

from typing import Optional

import click
from sqlalchemy.orm import Session

from devagenda.core.dates import parse_date
from devagenda.core.errors import DevAgendaError
from devagenda.core.reporting import generate_monthly_report, generate_weekly_report
from devagenda.core.sync import sync_project_commits
from devagenda.core.users import get_or_create_user
from devagenda.database import Base, SessionLocal, engine
from devagenda.models.project import Project
from devagenda.providers.github import GitHubProvider
from devagenda.seed import load_projects, seed_projects


@click.group()
def cli():
    """DevAgenda CLI."""
    pass


@cli.command()
def init_db():
    """Create database tables."""
    Base.metadata.create_all(bind=engine)
    click.echo("Tables created")


@cli.command()
@click.option("--user-id", required=True, prompt=True)
def create_user(user_id: str):
    """Create a user if it does not exist."""
    db: Session = SessionLocal()
    try:
        user = get_or_create_user(db, user_id)
        click.echo(f"User {user.id} ready")
    finally:
        db.close()


@cli.command()
@click.option("--project-id", required=True, type=int)
@click.option("--queue", is_flag=True, help="Queue on the Celery worker instead of running inline")
def sync_project(project_id: int, queue: bool):
    """Sync a project's commits from GitHub."""
    if queue:
        from devagenda.worker.tasks import sync_project_commits_task

        sync_project_commits_task.delay(project_id)
        click.echo("Sync queued. Check worker logs for progress.")
        return

    db: Session = SessionLocal()
    try:
        project = db.query(Project).filter(Project.id == project_id).first()
        if not project:
            raise click.ClickException(f"Project {project_id} not found")
        if not project.user.github_token:
            raise click.ClickException("Project owner has no GitHub token")
        try:
            count = sync_project_commits(db, project, GitHubProvider(project.user.github_token))
        except DevAgendaError as e:
            raise click.ClickException(e.message)
        click.echo(f"Synced {count} commits")
    finally:
        db.close()


@cli.command()
@click.option("--user-id", required=True)
@click.option("--type", "report_type", type=click.Choice(["weekly", "monthly"]), default="weekly")
@click.option("--date", "reference", default=None, help="Reference date (YYYY-MM-DD)")
@click.option("--project-id", type=int, default=None)
def generate_report(user_id: str, report_type: str, reference: Optional[str], project_id: Optional[int]):
    """Generate a weekly or monthly report."""
    generate = generate_weekly_report if report_type == "weekly" else generate_monthly_report
    db: Session = SessionLocal()
    try:
        try:
            report = generate(db, user_id, project_id, parse_date(reference))
        except DevAgendaError as e:
            raise click.ClickException(e.message)
        click.echo(
            f"Report {report.id}: {report.start_date} - {report.end_date}, "
            f"{report.total_commits} commits (+{report.total_additions}/-{report.total_deletions})"
        )
    finally:
        db.close()


@cli.command()
@click.argument("yaml_file", type=click.Path(exists=True, dir_okay=False))
def seed(yaml_file: str):
    """Seed users and projects from a YAML file."""
    db: Session = SessionLocal()
    try:
        created = seed_projects(db, load_projects(yaml_file))
        click.echo(f"Seeded {created} projects")
    finally:
        db.close()


if __name__ == "__main__":
    cli()
