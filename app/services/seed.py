# app/services/seed.py
import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.security import hash_password
from app.models.report import Report
from app.models.user import User

logger = logging.getLogger("seed")

DEFAULT_USERS = [
    {"username": "user", "password": "user123", "role": "user"},
    {"username": "authority", "password": "auth123", "role": "authority"},
]

SAMPLE_REPORTS = [
    {
        "type": "garbage",
        "severity": "high",
        "description": "Large garbage pile near market street",
        "location": "Market Road, Pendurthi",
        "status": "resolved",
    },
    {
        "type": "drainage",
        "severity": "critical",
        "description": "Clogged drain causing water logging",
        "location": "Main Street, Pendurthi",
        "status": "in_progress",
    },
    {
        "type": "stagnant_water",
        "severity": "medium",
        "description": "Stagnant water near residential area",
        "location": "Housing Colony, Pendurthi",
        "status": "submitted",
    },
]


def seed_defaults(db: Session, rounds: int) -> None:
    """Insert demo accounts (if missing) and sample reports (if the table is empty)."""
    for spec in DEFAULT_USERS:
        if db.query(User).filter(User.username == spec["username"]).first():
            continue
        db.add(User(username=spec["username"], password_hash=hash_password(spec["password"], rounds), role=spec["role"]))
        logger.info("created default user %s (%s)", spec["username"], spec["role"])
    db.commit()

    if (db.query(func.count(Report.id)).scalar() or 0) > 0:
        return

    reporter = db.query(User).filter(User.username == "user").first()
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    for i, spec in enumerate(SAMPLE_REPORTS):
        created = now - timedelta(days=len(SAMPLE_REPORTS) - i)
        db.add(Report(
            **spec,
            timestamp=created,
            resolved_at=created + timedelta(hours=18) if spec["status"] == "resolved" else None,
            reporter_id=reporter.id if reporter else None,
        ))
    db.commit()
    logger.info("inserted %d sample reports", len(SAMPLE_REPORTS))
