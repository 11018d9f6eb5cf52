# app/services/report_service.py
"""
Report lifecycle: submitted -> in_progress -> resolved.

Authorities move reports along the lifecycle and attach a resolution proof.
By default any status may be written (authorities can reopen a report);
with strict=True only same-state or single-step forward moves are accepted.
"""
from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import Forbidden, InvalidInput, NotFound, StoreFailure
from app.core.tokens import Subject
from app.db.session import transaction
from app.models.enums import ReportStatus, ReportType, Severity
from app.models.report import Report
from app.models.user import User
from app.schemas.report import ReportCreate

logger = logging.getLogger("reports")

ANONYMOUS = "Anonymous"

_ORDER = [ReportStatus.submitted, ReportStatus.in_progress, ReportStatus.resolved]


def _now_utc() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def can_transition(current: ReportStatus, new: ReportStatus) -> bool:
    if current == new:
        return True
    return _ORDER.index(new) == _ORDER.index(current) + 1


def _parse_enum(enum_cls, value: Optional[str], field: str):
    if not value:
        raise InvalidInput(f"{field} is required")
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(e.value for e in enum_cls)
        raise InvalidInput(f"Invalid {field} '{value}', expected one of: {allowed}")


def _parse_coord(value: Optional[str], field: str, limit: float) -> Optional[float]:
    if value is None or str(value).strip() == "":
        return None
    try:
        coord = float(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"Invalid {field} '{value}'")
    # float() also accepts "inf", "nan" and overflowing exponents
    if not math.isfinite(coord) or abs(coord) > limit:
        raise InvalidInput(f"Invalid {field} '{value}', expected a number between -{limit:g} and {limit:g}")
    return coord


def _required_text(value: Optional[str], field: str) -> str:
    if value is None or not value.strip():
        raise InvalidInput(f"{field} is required")
    return value


def require_authority(subject: Subject, action: str) -> None:
    if not subject.is_authority:
        logger.warning("forbidden %s by %s id=%s role=%s", action, subject.kind.value, subject.id, subject.role.value)
        raise Forbidden(f"Only authorities can {action}")


def _serialize(report: Report, reporter_name: Optional[str]) -> Dict[str, Any]:
    return {
        "id": report.id,
        "type": report.type,
        "severity": report.severity,
        "description": report.description,
        "location": report.location,
        "lat": report.lat,
        "lng": report.lng,
        "image_path": report.image_path,
        "status": report.status,
        "timestamp": report.timestamp,
        "resolved_at": report.resolved_at,
        "reporter_id": report.reporter_id,
        "reporter_name": reporter_name or ANONYMOUS,
    }


def _with_reporter(db: Session):
    return (
        db.query(Report, User.username)
        .outerjoin(User, Report.reporter_id == User.id)
    )


def _get_or_404(db: Session, report_id: int) -> Report:
    report = db.get(Report, report_id)
    if report is None:
        raise NotFound("Report not found")
    return report


def _apply_status(report: Report, new_status: ReportStatus) -> None:
    if new_status == ReportStatus.resolved:
        if report.status != ReportStatus.resolved.value or report.resolved_at is None:
            report.resolved_at = _now_utc()
    else:
        report.resolved_at = None
    report.status = new_status.value


def get_report(db: Session, report_id: int) -> Dict[str, Any]:
    row = _with_reporter(db).filter(Report.id == report_id).first()
    if row is None:
        raise NotFound("Report not found")
    return _serialize(*row)


def create_report(db: Session, subject: Subject, payload: ReportCreate) -> Dict[str, Any]:
    report_type = _parse_enum(ReportType, payload.type, "type")
    severity = _parse_enum(Severity, payload.severity or Severity.medium.value, "severity")
    description = _required_text(payload.description, "description")
    location = _required_text(payload.location, "location")

    report = Report(
        type=report_type.value,
        severity=severity.value,
        description=description,
        location=location,
        lat=_parse_coord(payload.lat, "lat", 90),
        lng=_parse_coord(payload.lng, "lng", 180),
        image_path=payload.image_path,
        status=ReportStatus.submitted.value,
        timestamp=_now_utc(),
        reporter_id=subject.citizen_id,
    )
    try:
        with transaction(db):
            db.add(report)
    except SQLAlchemyError:
        logger.exception("report insert failed")
        raise StoreFailure()

    logger.info("report %s created by %s id=%s type=%s", report.id, subject.kind.value, subject.id, report.type)
    return get_report(db, report.id)


def list_reports(db: Session) -> List[Dict[str, Any]]:
    rows = _with_reporter(db).order_by(Report.timestamp.desc(), Report.id.desc()).all()
    return [_serialize(r, name) for r, name in rows]


def list_own_reports(db: Session, subject: Subject) -> List[Dict[str, Any]]:
    if subject.citizen_id is None:
        return []
    rows = (
        _with_reporter(db)
        .filter(Report.reporter_id == subject.citizen_id)
        .order_by(Report.timestamp.desc(), Report.id.desc())
        .all()
    )
    return [_serialize(r, name) for r, name in rows]


def set_status(db: Session, subject: Subject, report_id: int, new_status: Optional[str],
               strict: bool = False) -> Report:
    require_authority(subject, "update report status")
    status = _parse_enum(ReportStatus, new_status, "status")
    report = _get_or_404(db, report_id)

    current = ReportStatus(report.status)
    if strict and not can_transition(current, status):
        raise InvalidInput(f"Cannot move report from {current.value} to {status.value}")

    try:
        with transaction(db):
            _apply_status(report, status)
    except SQLAlchemyError:
        logger.exception("status update failed for report %s", report_id)
        raise StoreFailure()

    logger.info("report %s status %s -> %s by authority %s", report_id, current.value, status.value, subject.id)
    return report


def attach_resolution_proof(db: Session, subject: Subject, report_id: int, image_path: Optional[str]) -> Report:
    require_authority(subject, "upload solved images")
    if not image_path:
        raise InvalidInput("Image file is required")
    report = _get_or_404(db, report_id)

    try:
        with transaction(db):
            report.image_path = image_path
    except SQLAlchemyError:
        logger.exception("image update failed for report %s", report_id)
        raise StoreFailure()

    logger.info("report %s resolution proof attached by authority %s", report_id, subject.id)
    return report


def resolve_with_proof(db: Session, subject: Subject, report_id: int, image_path: Optional[str],
                       strict: bool = False) -> Dict[str, Any]:
    """Attach the proof image and mark the report resolved in a single transaction."""
    require_authority(subject, "resolve reports")
    if not image_path:
        raise InvalidInput("Image file is required")
    report = _get_or_404(db, report_id)

    current = ReportStatus(report.status)
    if strict and not can_transition(current, ReportStatus.resolved):
        raise InvalidInput(f"Cannot move report from {current.value} to resolved")

    try:
        with transaction(db):
            report.image_path = image_path
            _apply_status(report, ReportStatus.resolved)
    except SQLAlchemyError:
        logger.exception("resolve failed for report %s", report_id)
        raise StoreFailure()

    logger.info("report %s resolved with proof by authority %s", report_id, subject.id)
    return get_report(db, report_id)
