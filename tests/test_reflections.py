"""Tests for daily reflections."""

from datetime import date, datetime

import pytest

from devagenda.core.errors import NotFoundError, ValidationError
from devagenda.core.reflections import (
    get_or_create_reflection,
    get_reflection_with_commits,
    update_reflection,
)
from devagenda.models.reflection import DailyReflection

DAY = date(2024, 3, 14)


def test_get_or_create_is_idempotent(db, user, make_project, add_commit):
    """Test reflection get-or-create returns one row per day."""
    project = make_project()
    add_commit(project, "a" * 40, datetime(2024, 3, 14, 9, 0))

    first = get_or_create_reflection(db, user.id, DAY)
    second = get_or_create_reflection(db, user.id, "2024-03-14")

    assert first.id == second.id
    assert first.commits_count == 1
    assert first.projects_worked == 1
    assert first.content == ""
    assert db.query(DailyReflection).count() == 1


def test_update_is_partial(db, user):
    """Test reflection updates only write supplied fields."""
    get_or_create_reflection(db, user.id, DAY)

    update_reflection(db, user.id, DAY, content="Shipped sync")
    reflection = update_reflection(db, user.id, DAY, feeling="good")

    assert reflection.content == "Shipped sync"
    assert reflection.feeling == "good"


def test_update_missing_reflection(db, user):
    """Test updating a reflection that does not exist."""
    with pytest.raises(NotFoundError):
        update_reflection(db, user.id, DAY, content="nothing here")


def test_update_requires_date(db, user):
    """Test reflection update requires a date."""
    with pytest.raises(ValidationError):
        update_reflection(db, user.id, None, content="x")


def test_snapshot_is_kept_while_live_view_changes(db, user, make_project, add_commit):
    """Test stored counts stay fixed while the live view changes."""
    project = make_project()
    add_commit(project, "a" * 40, datetime(2024, 3, 14, 9, 0))
    get_or_create_reflection(db, user.id, DAY)

    # synced after the reflection was first opened
    add_commit(project, "b" * 40, datetime(2024, 3, 14, 15, 0))
    other = make_project(name="Side", repo="side")
    add_commit(other, "c" * 40, datetime(2024, 3, 14, 16, 0))

    view = get_reflection_with_commits(db, user.id, DAY)

    assert view["reflection"]["commits_count"] == 1
    assert view["reflection"]["projects_worked"] == 1
    assert view["totalCommits"] == 3
    assert view["totalProjects"] == 2
    assert [c["sha"] for c in view["commits"]] == ["c" * 40, "b" * 40, "a" * 40]

    groups = {g["project"]["name"]: g for g in view["commitsByProject"]}
    assert len(groups["Agenda"]["commits"]) == 2
    assert groups["Side"]["project"]["github_repo"] == "side"
