# deebank_admin/api/__init__.py
from fastapi import APIRouter

from deebank_admin.api import (
    audit,
    bonus,
    company_banks,
    dashboard,
    products,
    session,
    support,
    transactions,
    users,
)

api_router = APIRouter()

api_router.include_router(session.router)
api_router.include_router(transactions.router)
api_router.include_router(audit.router)
api_router.include_router(dashboard.router)
api_router.include_router(users.router)
api_router.include_router(company_banks.router)
api_router.include_router(bonus.router)
api_router.include_router(products.router)
api_router.include_router(support.router)

__all__ = ["api_router"]
