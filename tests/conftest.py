"""
Pytest configuration and shared fixtures.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("TIMEZONE", "UTC")

from datetime import datetime  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from devagenda import models  # noqa: E402,F401
from devagenda.database import Base  # noqa: E402
from devagenda.models.commit import Commit  # noqa: E402
from devagenda.models.project import Project, ProjectStatus  # noqa: E402
from devagenda.models.user import User  # noqa: E402
from devagenda.providers.base import (  # noqa: E402
    CommitStats,
    Profile,
    RemoteCommit,
    Repository,
    SourceControlProvider,
)


@pytest.fixture
def db():
    """Session bound to a fresh in-memory database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def user(db):
    """User with a linked GitHub token."""
    u = User(id="user-1", github_username="octocat", github_token="ghp_test")
    db.add(u)
    db.commit()
    return u


@pytest.fixture
def make_project(db, user):
    """Factory for projects owned by the default user."""

    def _make(name="Agenda", status=ProjectStatus.IN_PROGRESS, owner="octocat", repo="agenda", user_id=None):
        project = Project(
            user_id=user_id or user.id,
            name=name,
            status=status,
            github_owner=owner,
            github_repo=repo,
        )
        db.add(project)
        db.commit()
        db.refresh(project)
        return project

    return _make


@pytest.fixture
def add_commit(db):
    """Factory for stored commits."""

    def _add(project, sha, when, additions=0, deletions=0, files_changed=0, message="work"):
        commit = Commit(
            project_id=project.id,
            sha=sha,
            message=message,
            author_name="Octo Cat",
            author_email="octo@example.com",
            commit_date=when,
            url=f"https://github.com/{project.github_owner}/{project.github_repo}/commit/{sha}",
            additions=additions,
            deletions=deletions,
            files_changed=files_changed,
        )
        db.add(commit)
        db.commit()
        return commit

    return _add


class FakeProvider(SourceControlProvider):
    """In-memory provider; stats for SHAs in ``failing`` raise."""

    def __init__(self, commits=None, stats=None, failing=(), list_error=None, profile=None):
        super().__init__("fake")
        self.commits = commits or []
        self.stats = stats or {}
        self.failing = set(failing)
        self.list_error = list_error
        self.profile = profile or Profile(id=1, login="octocat", name="Octo Cat")
        self.stats_calls = []
        self.list_calls = []

    def list_repositories(self):
        return [
            Repository(
                id=1,
                name="agenda",
                full_name="octocat/agenda",
                owner="octocat",
                description=None,
                private=False,
                url="https://github.com/octocat/agenda",
                updated_at=None,
            )
        ]

    def list_commits(self, owner, repo, since=None, until=None):
        self.list_calls.append({"owner": owner, "repo": repo, "since": since, "until": until})
        if self.list_error:
            raise self.list_error
        return list(self.commits)

    def get_commit_stats(self, owner, repo, sha):
        self.stats_calls.append(sha)
        if sha in self.failing:
            raise RuntimeError(f"stats for {sha} unavailable")
        return self.stats.get(sha, CommitStats())

    def get_profile(self):
        return self.profile


def remote_commit(sha, when, message="work"):
    return RemoteCommit(
        sha=sha,
        message=message,
        author_name="Octo Cat",
        author_email="octo@example.com",
        date=when,
        url=f"https://github.com/octocat/agenda/commit/{sha}",
    )


@pytest.fixture
def fake_provider():
    return FakeProvider


@pytest.fixture
def remote():
    return remote_commit


@pytest.fixture
def sample_now():
    return datetime(2024, 3, 14, 12, 0, 0)
