"""Ledger entry domain exceptions."""

from typing import Iterable

from .base import DomainException


class EntryNotFoundException(DomainException):
    """Raised when a ledger entry cannot be found."""

    def __init__(self, entry_id: str):
        super().__init__(
            message=f"Entry not found: {entry_id}",
            code="ENTRY_NOT_FOUND",
        )
        self.entry_id = entry_id


class InvalidTransitionException(DomainException):
    """Raised when an entry cannot move to the requested status."""

    def __init__(self, entry_id: str, current: str, action: str):
        super().__init__(
            message=f"Cannot {action} entry {entry_id} with status {current}",
            code="INVALID_TRANSITION",
        )
        self.entry_id = entry_id
        self.current = current
        self.action = action


class SettlementConflictException(DomainException):
    """
    Raised when a multi-entry settlement operation cannot be applied whole.

    No entry is modified when this is raised.
    """

    def __init__(self, message: str, entry_ids: Iterable[str] = ()):
        super().__init__(message=message, code="SETTLEMENT_CONFLICT")
        self.entry_ids = list(entry_ids)


class ConcurrentModificationException(DomainException):
    """Raised when an entry changed since the caller read it."""

    def __init__(self, entry_id: str):
        super().__init__(
            message=f"Entry {entry_id} was modified concurrently",
            code="CONCURRENT_MODIFICATION",
        )
        self.entry_id = entry_id
