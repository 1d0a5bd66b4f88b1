# deebank_admin/schemas/admin.py
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal


class AdminSessionOut(BaseModel):
    subject: str
    admin_name: str
    started_at: datetime
    audit_entries: int


class AuditLogEntryOut(BaseModel):
    id: str
    admin_name: str
    action: str
    details: str
    date: datetime

    class Config:
        from_attributes = True


# ----------------------------
#  COMPANY BANK ACCOUNTS
# ----------------------------
class CompanyBankCreate(BaseModel):
    bank_name: str = Field(..., min_length=1)
    iban: str = Field(..., min_length=1)
    beneficiary: Optional[str] = None
    active: bool = True

    @field_validator("iban")
    @classmethod
    def strip_iban(cls, v: str) -> str:
        return v.strip()


class CompanyBankUpdate(BaseModel):
    bank_name: Optional[str] = None
    iban: Optional[str] = None
    beneficiary: Optional[str] = None
    active: Optional[bool] = None


# ----------------------------
#  BONUS CODES
# ----------------------------
class BonusCodeCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=64)
    value: Decimal = Field(..., gt=0)
    expiry_date: date

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("code must not be blank")
        return v


# ----------------------------
#  SUPPORT LINKS
# ----------------------------
class SupportLinksUpdate(BaseModel):
    whatsapp_manager_url: str = ""
    whatsapp_sales_group_url: str = ""
    telegram_channel_url: str = ""


class UserListResponse(BaseModel):
    users: List[dict]
    count: int


# ----------------------------
#  USERS
# ----------------------------
class BalanceUpdate(BaseModel):
    balance: Decimal = Field(..., ge=0, max_digits=18, decimal_places=2)


class UserDetail(BaseModel):
    user: dict
    total_deposited: Decimal
    deposits: int
    withdrawals: int


# ----------------------------
#  DASHBOARD
# ----------------------------
class DashboardStats(BaseModel):
    total_users: int
    withdrawals_today: Decimal
    settled_deposits_total: Decimal
    active_products: int
    day: date
