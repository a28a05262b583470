"""Account-related domain exceptions."""

from .base import DomainException


class AccountNotFoundException(DomainException):
    """Raised when an account cannot be found."""

    def __init__(self, account_id: str):
        super().__init__(
            message=f"Account not found: {account_id}",
            code="ACCOUNT_NOT_FOUND",
        )
        self.account_id = account_id


class AccountInUseException(DomainException):
    """Raised when deleting an account that entries or sales still reference."""

    def __init__(self, account_id: str, references: int):
        super().__init__(
            message=f"Account {account_id} is referenced by {references} record(s)",
            code="ACCOUNT_IN_USE",
        )
        self.account_id = account_id
        self.references = references
