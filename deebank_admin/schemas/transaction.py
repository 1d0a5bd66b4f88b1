# deebank_admin/schemas/transaction.py
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal

from deebank_admin.services.status_mapper import Direction, NormalizedStatus


class TransactionView(BaseModel):
    """Deposit or withdrawal as the review screen shows it."""
    id: str
    direction: Direction
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    user_phone: Optional[str] = None
    amount: Decimal
    raw_status: str
    status: NormalizedStatus
    created_at: datetime
    bank_name: Optional[str] = None
    # Withdrawals only
    iban: Optional[str] = None
    net_payout: Optional[Decimal] = None

    class Config:
        from_attributes = True


class LocateRequest(BaseModel):
    phone: str
    status: str = "pendente"
    on_date: Optional[date] = None


class LocateResponse(BaseModel):
    found: bool
    stale: bool = False
    search_token: int
    transaction: Optional[TransactionView] = None
    message: Optional[str] = None


class SettleRequest(BaseModel):
    transaction_id: str
    new_status: str
    search_token: int


class SettleResponse(BaseModel):
    message: str
    transaction_id: str
    previous_status: str
    new_status: str
    status: NormalizedStatus
    audit_entry_id: str


class StatusOptions(BaseModel):
    direction: Direction
    selectable: List[str]
    recognized: List[str]


class RecentActivityResponse(BaseModel):
    direction: Direction
    status_filter: str
    limit: int = Field(..., ge=1)
    transactions: List[TransactionView]
