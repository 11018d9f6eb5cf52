from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, Float, ForeignKey, CheckConstraint
from app.db.session import Base

class Report(Base):
    __tablename__ = "reports"
    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String(32), nullable=False)
    severity = Column(String(16), nullable=False, default="medium")
    description = Column(Text, nullable=False)
    location = Column(Text, nullable=False)
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)
    image_path = Column(Text, nullable=True)     # initial photo, later overwritten by resolution proof
    status = Column(String(16), nullable=False, default="submitted")
    timestamp = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    resolved_at = Column(DateTime, nullable=True)
    reporter_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    __table_args__ = (
        CheckConstraint("type IN ('garbage', 'drainage', 'stagnant_water', 'other')", name="ck_reports_type"),
        CheckConstraint("severity IN ('low', 'medium', 'high', 'critical')", name="ck_reports_severity"),
        CheckConstraint("status IN ('submitted', 'in_progress', 'resolved')", name="ck_reports_status"),
    )
