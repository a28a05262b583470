"""Calendar stepping for plan due dates."""

from calendar import monthrange
from datetime import date, timedelta

from src.domain.entities import Frequency, FrequencyRule

DAYS_PER_STEP = {
    FrequencyRule.WEEKLY: 7,
    FrequencyRule.BIWEEKLY: 15,
}


def add_months(start: date, months: int) -> date:
    """
    Move `start` by whole calendar months keeping the day of month.

    Days that do not exist in the target month clamp to its last day:
    2024-01-31 + 1 month is 2024-02-29.
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    last_day = monthrange(year, month)[1]
    return date(year, month, min(start.day, last_day))


def step_date(first_due_date: date, frequency: Frequency, steps: int) -> date:
    """
    Due date `steps` units after `first_due_date`.

    Always computed from the first date, never chained from the previous
    item, so a clamped February does not drag later months to the 29th.
    """
    if steps == 0:
        return first_due_date

    if frequency.rule == FrequencyRule.MONTHLY:
        return add_months(first_due_date, steps)

    if frequency.rule == FrequencyRule.EVERY_N_DAYS:
        return first_due_date + timedelta(days=frequency.n_days * steps)

    return first_due_date + timedelta(days=DAYS_PER_STEP[frequency.rule] * steps)
