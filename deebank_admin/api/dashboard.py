# deebank_admin/api/dashboard.py
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from deebank_admin.api.deps import get_admin_session
from deebank_admin.crud.dashboard import dashboard_stats
from deebank_admin.db import get_db
from deebank_admin.schemas.admin import DashboardStats
from deebank_admin.services.admin_session import AdminSession

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStats)
def get_dashboard_stats(
    on_date: Optional[date] = Query(None, alias="date"),
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db),
):
    """
    Headline figures: registered users, withdrawal volume of the local day
    (today unless `date` is given), value of settled deposits and active
    products.
    """
    return dashboard_stats(db, on_date)
