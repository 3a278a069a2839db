"""Seed script for projects."""

import logging
import sys
from typing import Dict, List

import yaml
from sqlalchemy.orm import Session

from devagenda.core.projects import create_project
from devagenda.core.users import get_or_create_user
from devagenda.database import SessionLocal
from devagenda.models.project import Project

logger = logging.getLogger(__name__)


def load_projects(yaml_file: str) -> Dict[str, List[Dict]]:
    """Read {user_id: [project, ...]} from a YAML file with a top-level 'users' list."""
    with open(yaml_file, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    result: Dict[str, List[Dict]] = {}
    for entry in data.get("users", []):
        result[str(entry["id"])] = entry.get("projects", [])
    return result


def seed_projects(db: Session, projects_by_user: Dict[str, List[Dict]]) -> int:
    """Create missing projects; existing names for the same user are skipped."""
    created = 0
    for user_id, projects in projects_by_user.items():
        get_or_create_user(db, user_id)
        for project_data in projects:
            existing = (
                db.query(Project)
                .filter(Project.user_id == user_id, Project.name == project_data["name"])
                .first()
            )
            if existing:
                logger.info(f"Project {project_data['name']} already exists for {user_id}, skipping")
                continue
            create_project(db, user_id, project_data)
            created += 1
    return created


def main(yaml_file: str) -> int:
    db: Session = SessionLocal()
    try:
        return seed_projects(db, load_projects(yaml_file))
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python -m devagenda.seed projects.yaml")
        sys.exit(1)
    print(f"Seeded {main(sys.argv[1])} projects")
