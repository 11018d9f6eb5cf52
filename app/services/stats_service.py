from typing import Any, Dict

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.enums import ReportStatus
from app.models.report import Report


def _count(db: Session, *criteria) -> int:
    return db.query(func.count(Report.id)).filter(*criteria).scalar() or 0


def compute_stats(db: Session) -> Dict[str, Any]:
    """
    Derived counters over the reports table.
    responseTime is the mean of (resolved_at - timestamp) in hours over resolved
    reports that carry a resolution time; "0 hours" when there are none.
    """
    unique_citizens = (
        db.query(func.count(func.distinct(Report.reporter_id)))
        .filter(Report.reporter_id.isnot(None))
        .scalar()
        or 0
    )

    # считаем в python, julianday/epoch у sqlite и postgres разные
    spans = (
        db.query(Report.timestamp, Report.resolved_at)
        .filter(Report.status == ReportStatus.resolved.value, Report.resolved_at.isnot(None))
        .all()
    )
    hours = [(resolved - created).total_seconds() / 3600.0 for created, resolved in spans]
    response_time = f"{sum(hours) / len(hours):.1f} hours" if hours else "0 hours"

    return {
        "totalReports": _count(db),
        "resolvedReports": _count(db, Report.status == ReportStatus.resolved.value),
        "inProgress": _count(db, Report.status == ReportStatus.in_progress.value),
        "uniqueCitizens": unique_citizens,
        "responseTime": response_time,
    }
