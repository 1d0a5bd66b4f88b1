# deebank_admin/health.py
from datetime import datetime
import logging

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from deebank_admin.core.config import settings
from deebank_admin.db import get_db

logger = logging.getLogger(__name__)

SERVICE_VERSION = "1.0.0"


def add_health_endpoint(app: FastAPI):
    @app.get("/health", summary="Health Check", tags=["Health"])
    def health_check(db: Session = Depends(get_db)):
        try:
            db.execute(text("SELECT 1"))
            db_healthy = True
        except SQLAlchemyError as e:
            logger.error(f"Database health check failed: {e}")
            db_healthy = False

        return JSONResponse(
            status_code=200 if db_healthy else 503,
            content={
                "status": "healthy" if db_healthy else "unhealthy",
                "database": "connected" if db_healthy else "disconnected",
                "timestamp": datetime.utcnow().isoformat(),
                "service": settings.PROJECT_NAME,
                "version": SERVICE_VERSION,
            }
        )

    @app.get("/", summary="Root Endpoint", tags=["Health"])
    def root():
        return {
            "message": settings.PROJECT_NAME,
            "status": "operational",
            "version": SERVICE_VERSION,
            "timestamp": datetime.utcnow().isoformat()
        }
