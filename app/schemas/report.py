from typing import Optional
from datetime import datetime

from pydantic import BaseModel, ConfigDict

from app.models.enums import ReportStatus, ReportType, Severity


class ReportCreate(BaseModel):
    # form fields arrive as raw strings and are validated by the service
    type: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    severity: Optional[str] = None
    lat: Optional[str] = None
    lng: Optional[str] = None
    image_path: Optional[str] = None


class ReportOut(BaseModel):
    id: int
    type: ReportType
    severity: Severity
    description: str
    location: str
    lat: Optional[float] = None
    lng: Optional[float] = None
    image_path: Optional[str] = None
    status: ReportStatus
    timestamp: datetime
    resolved_at: Optional[datetime] = None
    reporter_id: Optional[int] = None
    reporter_name: str = "Anonymous"

    model_config = ConfigDict(from_attributes=True)


class StatusUpdate(BaseModel):
    status: str = ""


class MessageOut(BaseModel):
    message: str


class ImageUpdateOut(MessageOut):
    image_path: str
