"""Tests for report generation."""

from datetime import date, datetime

import pytest

from devagenda.core.errors import NotFoundError, ValidationError
from devagenda.core.reporting import (
    generate_monthly_report,
    generate_report,
    generate_weekly_report,
    get_report,
    list_reports,
    render_report_html,
)
from devagenda.models.report import Report, ReportType


def test_empty_scope_is_persisted_with_zeros(db, user):
    """Test a report without projects is stored with zeros."""
    report = generate_weekly_report(db, user.id, reference=date(2024, 3, 14))

    assert report.id is not None
    assert report.total_commits == 0
    assert report.projects_count == 0
    assert report.project_id is None
    assert report.content["statistics"]["projects"] == []
    assert db.query(Report).count() == 1


def test_weekly_report_payload(db, user, make_project, add_commit):
    """Test weekly report totals and payload shape."""
    project = make_project()
    add_commit(project, "a" * 40, datetime(2024, 3, 11, 0, 0), additions=10, deletions=2, message="first")
    add_commit(project, "b" * 40, datetime(2024, 3, 17, 23, 0), additions=5, deletions=1, message="last")
    add_commit(project, "c" * 40, datetime(2024, 3, 18, 1, 0), additions=100)

    report = generate_weekly_report(db, user.id, reference="2024-03-14")

    assert report.report_type == ReportType.WEEKLY
    assert report.start_date == date(2024, 3, 11)
    assert report.end_date == date(2024, 3, 17)
    assert report.total_commits == 2
    assert report.total_additions == 15
    assert report.total_deletions == 3

    content = report.content
    assert content["period"] == {
        "start": "2024-03-11",
        "end": "2024-03-17",
        "startFormatted": "March 11, 2024",
        "endFormatted": "March 17, 2024",
    }
    assert content["generatedAt"].endswith("Z")

    entry = content["statistics"]["projects"][0]
    assert entry["name"] == "Agenda"
    assert entry["status"] == "in-progress"
    assert entry["commits"] == 2
    assert [c["sha"] for c in entry["commitsList"]] == ["b" * 7, "a" * 7]
    assert entry["commitsList"][0]["message"] == "last"


def test_monthly_report_period(db, user):
    """Test monthly report covers the calendar month."""
    report = generate_monthly_report(db, user.id, reference=date(2024, 2, 10))
    assert report.report_type == ReportType.MONTHLY
    assert (report.start_date, report.end_date) == (date(2024, 2, 1), date(2024, 2, 29))


def test_project_scope(db, user, make_project, add_commit):
    """Test a report scoped to one project."""
    first = make_project(name="One", repo="one")
    second = make_project(name="Two", repo="two")
    add_commit(first, "a" * 40, datetime(2024, 3, 12, 9, 0))
    add_commit(second, "b" * 40, datetime(2024, 3, 12, 9, 0))

    report = generate_weekly_report(db, user.id, project_id=second.id, reference=date(2024, 3, 12))

    assert report.project_id == second.id
    assert report.projects_count == 1
    assert report.total_commits == 1
    assert report.content["statistics"]["projects"][0]["id"] == second.id


def test_no_deduplication(db, user):
    """Test every generation stores a new report."""
    generate_weekly_report(db, user.id, reference=date(2024, 3, 14))
    generate_weekly_report(db, user.id, reference=date(2024, 3, 14))
    assert db.query(Report).count() == 2


def test_end_before_start_is_rejected(db, user):
    """Test an inverted period is rejected."""
    with pytest.raises(ValidationError):
        generate_report(db, user.id, "weekly", date(2024, 3, 17), date(2024, 3, 11))


def test_invalid_report_type(db, user):
    """Test an unknown report type is rejected."""
    with pytest.raises(ValidationError):
        generate_report(db, user.id, "yearly", date(2024, 3, 11), date(2024, 3, 17))


def test_list_and_get_reports(db, user):
    """Test listing and fetching reports."""
    weekly = generate_weekly_report(db, user.id, reference=date(2024, 3, 14))
    monthly = generate_monthly_report(db, user.id, reference=date(2024, 3, 14))

    assert [r.id for r in list_reports(db, user.id)] == [monthly.id, weekly.id]
    assert [r.id for r in list_reports(db, user.id, "weekly")] == [weekly.id]
    assert get_report(db, weekly.id, user.id).id == weekly.id

    with pytest.raises(NotFoundError):
        get_report(db, weekly.id, "someone-else")


def test_render_html_escapes_messages(db, user, make_project, add_commit):
    """Test HTML rendering escapes commit messages."""
    project = make_project()
    add_commit(project, "a" * 40, datetime(2024, 3, 12, 9, 0), message="<script>x</script>")

    html = render_report_html(generate_weekly_report(db, user.id, reference=date(2024, 3, 12)))

    assert "Weekly Report" in html
    assert "March 11, 2024" in html
    assert "aaaaaaa" in html
    assert "<script>x</script>" not in html
    assert "&lt;script&gt;" in html
