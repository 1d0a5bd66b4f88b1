# deebank_admin/crud/support_links.py
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from deebank_admin.crud.base import backend_failure, commit
from deebank_admin.models.support_links import SupportLinks
from deebank_admin.schemas.admin import SupportLinksUpdate


def get_support_links(db: Session) -> Optional[SupportLinks]:
    """The single links row, if one was ever saved."""
    try:
        return db.execute(select(SupportLinks).limit(1)).scalars().first()
    except SQLAlchemyError as e:
        backend_failure(db, "get_support_links", e)


def save_support_links(db: Session, links: SupportLinksUpdate) -> SupportLinks:
    row = get_support_links(db)
    if row is None:
        row = SupportLinks()
        db.add(row)
    row.whatsapp_gerente_url = links.whatsapp_manager_url.strip()
    row.whatsapp_grupo_vendas_url = links.whatsapp_sales_group_url.strip()
    row.telegram_canal_url = links.telegram_channel_url.strip()
    return commit(db, "save_support_links", row)
