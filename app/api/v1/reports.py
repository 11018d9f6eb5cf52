# app/api/v1/reports.py
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from app.core.config_env import Settings
from app.core.deps import get_current_subject, get_app_settings
from app.core.tokens import Subject
from app.db.session import get_db
from app.schemas.report import ImageUpdateOut, MessageOut, ReportCreate, ReportOut, StatusUpdate
from app.services import report_service
from app.utils.media import discard_upload, save_upload

router = APIRouter(tags=["reports"])


@router.get("/reports", response_model=List[ReportOut])
def list_reports(db: Session = Depends(get_db), _subject: Subject = Depends(get_current_subject)):
    return report_service.list_reports(db)


@router.get("/user/reports", response_model=List[ReportOut])
def list_own_reports(db: Session = Depends(get_db), subject: Subject = Depends(get_current_subject)):
    return report_service.list_own_reports(db, subject)


@router.post("/reports", response_model=ReportOut, status_code=status.HTTP_201_CREATED)
def create_report(
    type: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    severity: Optional[str] = Form(None),
    lat: Optional[str] = Form(None),
    lng: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    subject: Subject = Depends(get_current_subject),
    settings: Settings = Depends(get_app_settings),
):
    payload = ReportCreate(type=type, description=description, location=location,
                           severity=severity, lat=lat, lng=lng)
    # файл пишем до вставки строки; при ошибке вставки — удаляем его
    payload.image_path = save_upload(image, settings.UPLOAD_DIR)
    try:
        return report_service.create_report(db, subject, payload)
    except Exception:
        discard_upload(payload.image_path, settings.UPLOAD_DIR)
        raise


@router.patch("/reports/{report_id}/status", response_model=MessageOut)
def update_status(
    report_id: int,
    payload: StatusUpdate,
    db: Session = Depends(get_db),
    subject: Subject = Depends(get_current_subject),
    settings: Settings = Depends(get_app_settings),
):
    report_service.set_status(db, subject, report_id, payload.status, strict=settings.STRICT_STATUS_TRANSITIONS)
    return {"message": "Status updated successfully"}


@router.patch("/reports/{report_id}/image", response_model=ImageUpdateOut)
def upload_solved_image(
    report_id: int,
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    subject: Subject = Depends(get_current_subject),
    settings: Settings = Depends(get_app_settings),
):
    # роль проверяем до записи файла, чтобы не копить чужие загрузки
    report_service.require_authority(subject, "upload solved images")
    image_path = save_upload(image, settings.UPLOAD_DIR)
    try:
        report_service.attach_resolution_proof(db, subject, report_id, image_path)
    except Exception:
        discard_upload(image_path, settings.UPLOAD_DIR)
        raise
    return {"message": "Solved image uploaded successfully", "image_path": image_path}


@router.patch("/reports/{report_id}/resolve", response_model=ReportOut)
def resolve_report(
    report_id: int,
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    subject: Subject = Depends(get_current_subject),
    settings: Settings = Depends(get_app_settings),
):
    report_service.require_authority(subject, "resolve reports")
    image_path = save_upload(image, settings.UPLOAD_DIR)
    try:
        return report_service.resolve_with_proof(
            db, subject, report_id, image_path, strict=settings.STRICT_STATUS_TRANSITIONS
        )
    except Exception:
        discard_upload(image_path, settings.UPLOAD_DIR)
        raise
