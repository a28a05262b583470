"""Installment plan entities: a derived preview, never persisted as such."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Tuple

from src.domain.exceptions import InvalidInputException


class FrequencyRule(str, Enum):
    MONTHLY = "monthly"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    EVERY_N_DAYS = "every_n_days"


class PlanKind(str, Enum):
    INSTALLMENT = "installment"  # total split across items
    RECURRENCE = "recurrence"  # full amount repeated on every item


@dataclass(frozen=True)
class Frequency:
    """Date-stepping rule between consecutive plan items."""

    rule: FrequencyRule
    n_days: int | None = None

    def __post_init__(self):
        if self.rule == FrequencyRule.EVERY_N_DAYS:
            if self.n_days is None or self.n_days < 1:
                raise InvalidInputException("every_n_days requires n_days >= 1")
        elif self.n_days is not None:
            raise InvalidInputException(
                f"n_days is only valid with {FrequencyRule.EVERY_N_DAYS.value}"
            )

    @classmethod
    def monthly(cls) -> "Frequency":
        return cls(FrequencyRule.MONTHLY)

    @classmethod
    def weekly(cls) -> "Frequency":
        return cls(FrequencyRule.WEEKLY)

    @classmethod
    def biweekly(cls) -> "Frequency":
        return cls(FrequencyRule.BIWEEKLY)

    @classmethod
    def every_n_days(cls, n: int) -> "Frequency":
        return cls(FrequencyRule.EVERY_N_DAYS, n)

    @classmethod
    def parse(cls, rule: str, n_days: int | None = None) -> "Frequency":
        """Build a frequency from raw request values."""
        try:
            parsed = FrequencyRule(rule)
        except ValueError:
            raise InvalidInputException(f"Unrecognized frequency: {rule!r}") from None
        return cls(parsed, n_days)


@dataclass(frozen=True)
class PlanItem:
    index: int
    due_date: date
    gross_cents: int
    fees_cents: int
    net_cents: int


@dataclass(frozen=True)
class InstallmentPlan:
    """
    Ordered plan items plus totals recomputed from them.

    The totals are for display; they are never used to correct items.
    """

    kind: PlanKind
    frequency: Frequency
    items: Tuple[PlanItem, ...]
    total_gross_cents: int
    total_fees_cents: int
    total_net_cents: int

    @property
    def count(self) -> int:
        return len(self.items)
