# deebank_admin/services/errors.py
"""
Error taxonomy of the back office.

Validation errors are rendered inline next to the offending field, the rest
become transient notifications. Not-found on a search is not an error at all:
the locator returns None and the client shows its empty state.
"""


class BackOfficeError(Exception):
    """Base class; `message_key` indexes the i18n catalog."""

    message_key = "error.generic"

    def __init__(self, message: str = "", **params):
        super().__init__(message or self.message_key)
        self.params = params


class InvalidPhoneNumber(BackOfficeError):
    message_key = "validation.phone"
    field = "phone"


class InvalidStatusTransition(BackOfficeError):
    message_key = "validation.status"
    field = "new_status"


class BackendUnavailable(BackOfficeError):
    """Network failure, permission denial or constraint violation in the backend."""

    message_key = "error.backend"


class RecordNotFound(BackOfficeError):
    message_key = "error.not_found"


class DuplicateRecord(BackOfficeError):
    message_key = "error.duplicate"


class SettlementConflict(BackOfficeError):
    """Another admin changed the status after it was displayed."""

    message_key = "error.settlement_conflict"


class StaleSearchContext(BackOfficeError):
    message_key = "error.stale_context"


class SessionNotStarted(BackOfficeError):
    message_key = "error.session_not_started"
