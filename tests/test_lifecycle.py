from datetime import timedelta

import pytest
from sqlalchemy.exc import OperationalError

from app.core.errors import Forbidden, InvalidInput, NotFound, StoreFailure
from app.core.tokens import Subject
from app.models.enums import PrincipalKind, ReportStatus, UserRole
from app.models.report import Report
from app.models.user import User
from app.schemas.report import ReportCreate
from app.services import report_service
from app.services.seed import seed_defaults
from app.services.stats_service import compute_stats


@pytest.fixture
def alice(db) -> Subject:
    user = User(username="alice", password_hash="x", role="user")
    db.add(user)
    db.commit()
    return Subject(id=user.id, username="alice", role=UserRole.user, kind=PrincipalKind.citizen)


def _payload(**kw) -> ReportCreate:
    base = {"type": "garbage", "description": "overflowing bin", "location": "5th St"}
    base.update(kw)
    return ReportCreate(**base)


@pytest.mark.parametrize("current, new, allowed", [
    (ReportStatus.submitted, ReportStatus.submitted, True),
    (ReportStatus.submitted, ReportStatus.in_progress, True),
    (ReportStatus.in_progress, ReportStatus.resolved, True),
    (ReportStatus.submitted, ReportStatus.resolved, False),
    (ReportStatus.resolved, ReportStatus.in_progress, False),
    (ReportStatus.in_progress, ReportStatus.submitted, False),
])
def test_can_transition(current, new, allowed):
    assert report_service.can_transition(current, new) is allowed


def test_created_report_keeps_timestamp(db, alice, authority_subject):
    created = report_service.create_report(db, alice, _payload())
    assert created["status"] == "submitted"

    report_service.set_status(db, authority_subject, created["id"], "in_progress")
    report_service.set_status(db, authority_subject, created["id"], "resolved")

    assert report_service.get_report(db, created["id"])["timestamp"] == created["timestamp"]


def test_resolved_at_follows_status(db, alice, authority_subject):
    rid = report_service.create_report(db, alice, _payload())["id"]

    report = report_service.set_status(db, authority_subject, rid, "resolved")
    resolved_at = report.resolved_at
    assert resolved_at is not None

    # повторная установка resolved не сдвигает время
    report = report_service.set_status(db, authority_subject, rid, "resolved")
    assert report.resolved_at == resolved_at

    # переоткрытие сбрасывает отметку
    report = report_service.set_status(db, authority_subject, rid, "in_progress")
    assert report.resolved_at is None


def test_lifecycle_requires_authority(db, alice, citizen_subject):
    rid = report_service.create_report(db, alice, _payload())["id"]
    with pytest.raises(Forbidden):
        report_service.set_status(db, alice, rid, "in_progress")
    with pytest.raises(Forbidden):
        report_service.attach_resolution_proof(db, alice, rid, "/uploads/p.jpg")
    with pytest.raises(Forbidden):
        report_service.resolve_with_proof(db, citizen_subject, rid, "/uploads/p.jpg")


def test_missing_report_and_missing_image(db, authority_subject):
    with pytest.raises(NotFound):
        report_service.set_status(db, authority_subject, 42, "resolved")
    with pytest.raises(NotFound):
        report_service.attach_resolution_proof(db, authority_subject, 42, "/uploads/p.jpg")
    with pytest.raises(InvalidInput):
        report_service.attach_resolution_proof(db, authority_subject, 42, None)


def test_resolve_with_proof_rolls_back_both_fields(db, alice, authority_subject, monkeypatch):
    rid = report_service.create_report(db, alice, _payload(image_path="/uploads/before.jpg"))["id"]

    def broken_apply(report, status):
        report.status = status.value
        raise OperationalError("UPDATE reports", {}, Exception("disk I/O error"))

    monkeypatch.setattr(report_service, "_apply_status", broken_apply)
    with pytest.raises(StoreFailure):
        report_service.resolve_with_proof(db, authority_subject, rid, "/uploads/after.jpg")

    db.expire_all()
    report = db.get(Report, rid)
    assert report.image_path == "/uploads/before.jpg"
    assert report.status == "submitted"


def test_anonymous_report_never_in_own_lists(db, alice, authority_subject):
    anon = report_service.create_report(db, authority_subject, _payload(description="from the field"))
    assert anon["reporter_id"] is None
    assert anon["reporter_name"] == "Anonymous"

    assert report_service.list_own_reports(db, alice) == []
    assert report_service.list_own_reports(db, authority_subject) == []
    assert [r["id"] for r in report_service.list_reports(db)] == [anon["id"]]


def test_stats_match_listing(db, alice, authority_subject):
    assert compute_stats(db) == {
        "totalReports": 0, "resolvedReports": 0, "inProgress": 0,
        "uniqueCitizens": 0, "responseTime": "0 hours",
    }

    a = report_service.create_report(db, alice, _payload())["id"]
    b = report_service.create_report(db, alice, _payload(type="drainage"))["id"]
    report_service.create_report(db, authority_subject, _payload(type="other"))
    report_service.set_status(db, authority_subject, a, "in_progress")
    report_service.set_status(db, authority_subject, b, "resolved")

    # фиксируем длительность: 6 часов между созданием и решением
    report = db.get(Report, b)
    report.resolved_at = report.timestamp + timedelta(hours=6)
    db.commit()

    stats = compute_stats(db)
    assert stats["totalReports"] == len(report_service.list_reports(db)) == 3
    assert stats["resolvedReports"] == 1
    assert stats["inProgress"] == 1
    assert stats["uniqueCitizens"] == 1
    assert stats["responseTime"] == "6.0 hours"


def test_seed_defaults_is_idempotent(db):
    seed_defaults(db, rounds=4)
    seed_defaults(db, rounds=4)

    assert {u.username: u.role for u in db.query(User).all()} == {"user": "user", "authority": "authority"}
    reports = report_service.list_reports(db)
    assert len(reports) == 3
    assert {r["status"] for r in reports} == {"submitted", "in_progress", "resolved"}
    assert all(r["reporter_name"] == "user" for r in reports)
    assert compute_stats(db)["responseTime"] == "18.0 hours"
