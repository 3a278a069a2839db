"""Tests for commit queries and day grouping."""

from datetime import date, datetime

import pytest

from devagenda.core.commits import (
    get_commits_by_day,
    get_day_commits,
    get_project_commits,
    get_project_stats,
)
from devagenda.core.errors import NotFoundError
from devagenda.models.project import ProjectStatus
from devagenda.models.user import User


def test_group_by_day_totals(db, user, make_project, add_commit):
    """Test day buckets carry per-day totals."""
    project = make_project()
    add_commit(project, "a" * 40, datetime(2024, 3, 14, 9, 0), additions=10, deletions=1, files_changed=2)
    add_commit(project, "b" * 40, datetime(2024, 3, 14, 17, 30), additions=5, deletions=5, files_changed=1)
    add_commit(project, "c" * 40, datetime(2024, 3, 12, 8, 0), additions=3, deletions=0, files_changed=1)

    buckets = get_commits_by_day(db, project.id, user.id)

    assert [b["date"] for b in buckets] == ["2024-03-14", "2024-03-12"]
    assert buckets[0]["displayDate"] == "Thursday, March 14, 2024"
    assert buckets[0]["totalAdditions"] == 15
    assert buckets[0]["totalDeletions"] == 6
    assert buckets[0]["totalFiles"] == 3
    assert [c["sha"] for c in buckets[0]["commits"]] == ["b" * 40, "a" * 40]

    all_shas = [c["sha"] for b in buckets for c in b["commits"]]
    assert sorted(all_shas) == sorted(["a" * 40, "b" * 40, "c" * 40])


def test_project_commits_inclusive_date_only_bounds(db, user, make_project, add_commit):
    """Test date-only bounds include both whole days."""
    project = make_project()
    add_commit(project, "a" * 40, datetime(2024, 3, 10, 23, 59))
    add_commit(project, "b" * 40, datetime(2024, 3, 11, 0, 0))
    add_commit(project, "c" * 40, datetime(2024, 3, 17, 22, 0))
    add_commit(project, "d" * 40, datetime(2024, 3, 18, 0, 1))

    commits = get_project_commits(db, project.id, user.id, "2024-03-11", "2024-03-17")

    assert [c.sha for c in commits] == ["c" * 40, "b" * 40]


def test_project_stats(db, user, make_project, add_commit):
    """Test lifetime project statistics."""
    project = make_project()
    add_commit(project, "a" * 40, datetime(2024, 3, 1, 9, 0), additions=4, deletions=2, files_changed=1)
    add_commit(project, "b" * 40, datetime(2024, 3, 5, 9, 0), additions=6, deletions=1, files_changed=3)

    stats = get_project_stats(db, project.id, user.id)

    assert stats["totalCommits"] == 2
    assert stats["totalAdditions"] == 10
    assert stats["totalDeletions"] == 3
    assert stats["totalFiles"] == 4
    assert stats["firstCommit"] == "2024-03-01T09:00:00"
    assert stats["lastCommit"] == "2024-03-05T09:00:00"


def test_empty_project_stats(db, user, make_project):
    """Test statistics of a project without commits."""
    stats = get_project_stats(db, make_project().id, user.id)
    assert stats["totalCommits"] == 0
    assert stats["firstCommit"] is None


def test_other_users_project_is_not_found(db, make_project):
    """Test commits of a foreign project are not found."""
    db.add(User(id="user-2"))
    db.commit()
    project = make_project()

    with pytest.raises(NotFoundError):
        get_project_commits(db, project.id, "user-2")


def test_day_commits_only_in_progress_projects(db, user, make_project, add_commit):
    """Test day commits only come from in-progress projects."""
    active = make_project(name="Active", repo="active")
    done = make_project(name="Done", status=ProjectStatus.DONE, repo="done")
    add_commit(active, "a" * 40, datetime(2024, 3, 14, 9, 0))
    add_commit(done, "b" * 40, datetime(2024, 3, 14, 10, 0))
    add_commit(active, "c" * 40, datetime(2024, 3, 13, 10, 0))

    commits = get_day_commits(db, user.id, date(2024, 3, 14))

    assert [c.sha for c in commits] == ["a" * 40]
    assert commits[0].project.name == "Active"
