# deebank_admin/services/transaction_locator.py
"""Find the latest transaction of a customer, by phone, in a given raw status."""
import re
from datetime import date
from decimal import Decimal
from typing import Optional

from deebank_admin.core.config import settings
from deebank_admin.models.deposit import Deposit
from deebank_admin.models.profile import Profile
from deebank_admin.models.withdrawal import Withdrawal
from deebank_admin.schemas.transaction import TransactionView
from deebank_admin.services.backend import BackendDataService
from deebank_admin.services.errors import InvalidPhoneNumber
from deebank_admin.services.status_mapper import Direction, normalize
from deebank_admin.utils.dates import local_day_bounds

# Angolan mobile numbering: 9 digits, leading 9
PHONE_PATTERN = re.compile(r"^9[0-9]{8}$")


def is_valid_phone(phone: Optional[str]) -> bool:
    return bool(phone) and PHONE_PATTERN.fullmatch(phone) is not None


def validate_phone(phone: Optional[str]) -> str:
    if not is_valid_phone(phone):
        raise InvalidPhoneNumber(f"Invalid phone number: {phone!r}", phone=phone)
    return phone


def net_payout(amount, fee_rate: Optional[float] = None) -> Decimal:
    """Withdrawal amount after the service fee, unrounded. Display only, never persisted."""
    if fee_rate is None:
        fee_rate = settings.WITHDRAWAL_FEE_RATE
    keep = Decimal(1) - Decimal(str(fee_rate))
    return Decimal(amount) * keep


def deposit_view(deposit: Deposit, profile: Optional[Profile]) -> TransactionView:
    return TransactionView(
        id=deposit.id,
        direction=Direction.DEPOSIT,
        user_id=deposit.user_id,
        user_name=profile.full_name if profile else None,
        user_phone=profile.phone if profile else None,
        amount=deposit.valor,
        raw_status=deposit.estado,
        status=normalize(deposit.estado, Direction.DEPOSIT),
        created_at=deposit.created_at,
        bank_name=deposit.nome_do_banco,
    )


def withdrawal_view(withdrawal: Withdrawal, profile: Optional[Profile]) -> TransactionView:
    return TransactionView(
        id=withdrawal.id,
        direction=Direction.WITHDRAWAL,
        user_id=withdrawal.user_id,
        user_name=profile.full_name if profile else None,
        user_phone=withdrawal.telefone,
        amount=withdrawal.valor,
        raw_status=withdrawal.status,
        status=normalize(withdrawal.status, Direction.WITHDRAWAL),
        created_at=withdrawal.created_at,
        bank_name=withdrawal.nome_do_banco,
        iban=withdrawal.iban,
        net_payout=net_payout(withdrawal.valor),
    )


def locate(
    backend: BackendDataService,
    phone: str,
    direction: Direction,
    desired_raw_status: str,
    on_date: Optional[date] = None,
) -> Optional[TransactionView]:
    """
    Return the most recently created transaction matching phone, direction,
    raw status and (optionally) the local calendar day, or None.

    The phone is validated before the backend is touched.
    """
    validate_phone(phone)
    direction = Direction(direction)
    window = local_day_bounds(on_date) if on_date else None

    if direction == Direction.DEPOSIT:
        profile = backend.find_profile_by_phone(phone)
        if profile is None:
            return None
        deposit = backend.latest_deposit(profile.id, desired_raw_status, window)
        if deposit is None:
            return None
        return deposit_view(deposit, profile)

    withdrawal = backend.latest_withdrawal(phone, desired_raw_status, window)
    if withdrawal is None:
        return None
    profile = backend.get_profiles([withdrawal.user_id]).get(withdrawal.user_id)
    return withdrawal_view(withdrawal, profile)
