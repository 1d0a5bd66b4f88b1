# deebank_admin/api/support.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from deebank_admin.api.deps import get_admin_session, log_admin_action
from deebank_admin.core.i18n import request_language, t
from deebank_admin.crud.support_links import get_support_links, save_support_links
from deebank_admin.db import get_db
from deebank_admin.schemas.admin import SupportLinksUpdate
from deebank_admin.services.admin_session import AdminSession

router = APIRouter(prefix="/support-links", tags=["Support"])

EMPTY_LINKS = SupportLinksUpdate().model_dump()


@router.get("")
def read_support_links(
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db),
):
    row = get_support_links(db)
    return row.to_dict() if row else dict(EMPTY_LINKS, id=None)


@router.put("")
def update_support_links(
    body: SupportLinksUpdate,
    request: Request,
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db),
):
    row = save_support_links(db, body)
    log_admin_action(session, "audit.support.updated")
    return {"message": t("support.saved", request_language(request)), "links": row.to_dict()}
