# deebank_admin/services/status_mapper.py
"""
Raw status vocabulary of the backend and its normalization.

Deposits and withdrawals were written by different parts of the platform and
do not share a vocabulary for "settled". Every literal the back office knows
is listed here once; nothing else in the code compares raw strings.
"""
from enum import Enum
from typing import Dict, List, Optional, Type


class Direction(str, Enum):
    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"


class NormalizedStatus(str, Enum):
    PENDING = "PENDING"
    SETTLED = "SETTLED"
    REJECTED = "REJECTED"


class DepositStatus(str, Enum):
    PENDING = "pendente"
    RECHARGED = "recarregado"
    APPROVED = "aprovado"  # historical rows
    REJECTED = "rejeitado"


class WithdrawalStatus(str, Enum):
    PENDING = "pendente"
    APPROVED = "aprovado"
    COMPLETED = "concluido"
    REJECTED = "rejeitado"


RAW_STATUS_ENUMS: Dict[Direction, Type[Enum]] = {
    Direction.DEPOSIT: DepositStatus,
    Direction.WITHDRAWAL: WithdrawalStatus,
}

STATUS_TABLE: Dict[Direction, Dict[str, NormalizedStatus]] = {
    Direction.DEPOSIT: {
        DepositStatus.PENDING.value: NormalizedStatus.PENDING,
        DepositStatus.RECHARGED.value: NormalizedStatus.SETTLED,
        DepositStatus.APPROVED.value: NormalizedStatus.SETTLED,
        DepositStatus.REJECTED.value: NormalizedStatus.REJECTED,
    },
    Direction.WITHDRAWAL: {
        WithdrawalStatus.PENDING.value: NormalizedStatus.PENDING,
        WithdrawalStatus.APPROVED.value: NormalizedStatus.SETTLED,
        WithdrawalStatus.COMPLETED.value: NormalizedStatus.SETTLED,
        WithdrawalStatus.REJECTED.value: NormalizedStatus.REJECTED,
    },
}

# What an operator may pick, in display order
SELECTABLE_STATUSES: Dict[Direction, List[str]] = {
    Direction.DEPOSIT: [
        DepositStatus.PENDING.value,
        DepositStatus.RECHARGED.value,
        DepositStatus.REJECTED.value,
    ],
    Direction.WITHDRAWAL: [
        WithdrawalStatus.PENDING.value,
        WithdrawalStatus.APPROVED.value,
        WithdrawalStatus.REJECTED.value,
    ],
}


def normalize(raw_status: Optional[str], direction: Direction) -> NormalizedStatus:
    """
    Map a raw backend literal to PENDING / SETTLED / REJECTED.

    Comparison ignores case and surrounding whitespace. Unknown, empty or missing literals are
    PENDING, so an unrecognized state is never shown as settled.
    """
    if not raw_status:
        return NormalizedStatus.PENDING
    table = STATUS_TABLE[Direction(direction)]
    return table.get(raw_status.strip().casefold(), NormalizedStatus.PENDING)


def recognized_statuses(direction: Direction) -> List[str]:
    return list(STATUS_TABLE[Direction(direction)].keys())


def selectable_statuses(direction: Direction) -> List[str]:
    return list(SELECTABLE_STATUSES[Direction(direction)])


def canonical_status(raw_status: Optional[str], direction: Direction) -> Optional[str]:
    """The stored spelling of a recognized literal, or None."""
    if not raw_status:
        return None
    key = raw_status.strip().casefold()
    return key if key in STATUS_TABLE[Direction(direction)] else None
