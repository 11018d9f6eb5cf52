from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.deps import get_current_subject
from app.db.session import get_db
from app.schemas.stats import StatsOut
from app.services.stats_service import compute_stats

router = APIRouter(tags=["stats"])

@router.get("/stats", response_model=StatsOut)
def get_stats(db: Session = Depends(get_db), _subject=Depends(get_current_subject)):
    return compute_stats(db)
