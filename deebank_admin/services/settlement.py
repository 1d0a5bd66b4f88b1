# deebank_admin/services/settlement.py
import logging
from dataclasses import dataclass

from deebank_admin.core.config import settings
from deebank_admin.core.i18n import t
from deebank_admin.core.security import AdminIdentity
from deebank_admin.schemas.transaction import TransactionView
from deebank_admin.services.audit_log import AuditLog, AuditLogEntry
from deebank_admin.services.backend import BackendDataService
from deebank_admin.services.errors import (
    InvalidStatusTransition,
    RecordNotFound,
    SettlementConflict,
)
from deebank_admin.services.status_mapper import (
    Direction,
    NormalizedStatus,
    canonical_status,
    normalize,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SettlementAck:
    transaction_id: str
    direction: Direction
    previous_status: str
    new_status: str
    status: NormalizedStatus
    audit_entry: AuditLogEntry


def settle(
    backend: BackendDataService,
    transaction: TransactionView,
    new_raw_status: str,
    actor: AdminIdentity,
    audit_log: AuditLog,
    version_check: bool = None,
) -> SettlementAck:
    """
    Write `new_raw_status` to the transaction's status column, then log it.

    The audit entry is appended only after the backend acknowledged the
    write; any failure raises before the log is touched. Settled and
    rejected transactions may be re-assigned. With the version check on, the
    write only applies while the row still holds the status the operator saw.
    """
    direction = Direction(transaction.direction)
    new_status = canonical_status(new_raw_status, direction)
    if new_status is None:
        raise InvalidStatusTransition(
            f"{new_raw_status!r} is not a {direction.value} status", status=new_raw_status
        )

    if version_check is None:
        version_check = settings.SETTLEMENT_VERSION_CHECK
    expected = transaction.raw_status if version_check else None

    updated = backend.set_status(direction, transaction.id, new_status, expected_status=expected)
    if not updated:
        if not backend.record_exists(direction, transaction.id):
            raise RecordNotFound(f"{direction.value} {transaction.id} not found", id=transaction.id)
        logger.warning(
            f"Settlement conflict on {direction.value} {transaction.id}: "
            f"expected '{expected}', row changed concurrently"
        )
        raise SettlementConflict(f"{direction.value} {transaction.id} changed concurrently", id=transaction.id)

    lang = settings.AUDIT_LANGUAGE
    action_key = "audit.settle.deposit" if direction == Direction.DEPOSIT else "audit.settle.withdrawal"
    entry = audit_log.record(
        t(action_key, lang),
        t(
            "audit.settle.details",
            lang,
            id=transaction.id,
            phone=transaction.user_phone or "-",
            old=transaction.raw_status,
            new=new_status,
        ),
        admin_name=actor.name,
    )
    logger.info(
        f"{actor.name} settled {direction.value} {transaction.id}: "
        f"{transaction.raw_status} -> {new_status}"
    )

    return SettlementAck(
        transaction_id=transaction.id,
        direction=direction,
        previous_status=transaction.raw_status,
        new_status=new_status,
        status=normalize(new_status, direction),
        audit_entry=entry,
    )
