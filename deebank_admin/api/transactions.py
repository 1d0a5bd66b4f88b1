# deebank_admin/api/transactions.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from deebank_admin.api.deps import DirectionPath, get_admin_session
from deebank_admin.core.i18n import request_language, t
from deebank_admin.schemas.transaction import (
    LocateRequest,
    LocateResponse,
    RecentActivityResponse,
    SettleRequest,
    SettleResponse,
    StatusOptions,
)
from deebank_admin.services.activity_feed import ALL_STATUSES
from deebank_admin.services.admin_session import AdminSession
from deebank_admin.services.backend import BackendDataService, get_backend
from deebank_admin.services.errors import InvalidStatusTransition
from deebank_admin.services.settlement import settle
from deebank_admin.services.status_mapper import (
    canonical_status,
    recognized_statuses,
    selectable_statuses,
)
from deebank_admin.services.transaction_locator import locate, validate_phone

router = APIRouter(prefix="/transactions", tags=["Transactions"])


@router.get("/{direction}/statuses", response_model=StatusOptions)
def get_statuses(direction: DirectionPath):
    return StatusOptions(
        direction=direction.direction,
        selectable=selectable_statuses(direction.direction),
        recognized=recognized_statuses(direction.direction),
    )


@router.post("/{direction}/locate", response_model=LocateResponse)
def locate_transaction(
    direction: DirectionPath,
    body: LocateRequest,
    request: Request,
    session: AdminSession = Depends(get_admin_session),
    backend: BackendDataService = Depends(get_backend),
):
    """
    Latest transaction of a customer in the requested raw status.

    Invalid input is rejected before the search starts, so the displayed
    transaction stays in place. Starting a search clears it; a result that
    arrives after a newer search started is returned with `stale` set and not
    shown.
    """
    lang = request_language(request)
    validate_phone(body.phone)
    raw_status = canonical_status(body.status, direction.direction)
    if raw_status is None:
        raise InvalidStatusTransition(f"Unknown status {body.status!r}", status=body.status)

    token = session.begin_search()
    found = locate(backend, body.phone, direction.direction, raw_status, body.on_date)
    applied = session.complete_search(token, found)

    return LocateResponse(
        found=found is not None,
        stale=not applied,
        search_token=token,
        transaction=found,
        message=t("locate.found" if found else "locate.not_found", lang),
    )


@router.post("/{direction}/settle", response_model=SettleResponse)
def settle_transaction(
    direction: DirectionPath,
    body: SettleRequest,
    request: Request,
    session: AdminSession = Depends(get_admin_session),
    backend: BackendDataService = Depends(get_backend),
):
    """Write a new raw status to the displayed transaction and audit it."""
    shown = session.check_settle_context(body.search_token, body.transaction_id)
    if shown.direction != direction.direction:
        raise InvalidStatusTransition(
            f"Transaction {shown.id} is not a {direction.value} record", status=body.new_status
        )

    ack = settle(backend, shown, body.new_status, session.identity, session.audit_log)
    session.apply_settlement(ack.transaction_id, ack.new_status)

    return SettleResponse(
        message=t("settle.success", request_language(request), id=ack.transaction_id, status=ack.new_status),
        transaction_id=ack.transaction_id,
        previous_status=ack.previous_status,
        new_status=ack.new_status,
        status=ack.status,
        audit_entry_id=ack.audit_entry.id,
    )


@router.get("/{direction}/recent", response_model=RecentActivityResponse)
def recent_activity(
    direction: DirectionPath,
    status: str = Query(ALL_STATUSES),
    limit: Optional[int] = Query(None, ge=1),
    refresh: bool = False,
    session: AdminSession = Depends(get_admin_session),
    backend: BackendDataService = Depends(get_backend),
):
    feed = session.feed(direction.direction)
    feed.set_filter(status, limit)
    rows = feed.refresh(backend) if refresh else feed.results(backend)
    return RecentActivityResponse(
        direction=direction.direction,
        status_filter=feed.status_filter,
        limit=feed.limit,
        transactions=rows,
    )
