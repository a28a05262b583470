"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .validation import InvalidInputException, InvalidRangeException
from .account import AccountInUseException, AccountNotFoundException
from .entry import (
    ConcurrentModificationException,
    EntryNotFoundException,
    InvalidTransitionException,
    SettlementConflictException,
)
from .catalog import InsufficientStockException, ResourceNotFoundException

__all__ = [
    "DomainException",
    "InvalidInputException",
    "InvalidRangeException",
    "AccountInUseException",
    "AccountNotFoundException",
    "ConcurrentModificationException",
    "EntryNotFoundException",
    "InvalidTransitionException",
    "SettlementConflictException",
    "InsufficientStockException",
    "ResourceNotFoundException",
]
