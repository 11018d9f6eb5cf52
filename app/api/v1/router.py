# app/api/v1/router.py
from fastapi import APIRouter

from app.api.v1.auth import router as auth_router
from app.api.v1.reports import router as reports_router
from app.api.v1.stats import router as stats_router

api_router = APIRouter()

api_router.include_router(auth_router)
api_router.include_router(reports_router)
api_router.include_router(stats_router)
