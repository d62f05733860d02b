"""
BILLING CALENDAR
================
Maps a task date onto the billing cycle defined by the configured invoice
days, and computes due dates from payment terms.

Invoice days are days of the month on which a cycle closes. With the
default schedule ``[1, 15]``:

    Jan 1-14   -> billed Jan 15
    Jan 15-31  -> billed Feb 1

Usage:
    from worklog.billing.calendar import resolve_billing_period

    period = resolve_billing_period(date(2024, 1, 20), [1, 15])
    period.billing_date   # '2024-02-01'
    period.period_label   # 'January 15-31 (Billed: February 1)'

Pure functions only: no I/O, no logging.
"""

from calendar import monthrange
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, List, Union

from worklog.common.errors import ConfigurationError

DateLike = Union[date, str]

# Fixed table so labels never depend on the process locale
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


@dataclass(frozen=True)
class BillingPeriod:
    billing_date: str  # YYYY-MM-DD
    period_label: str
    period_start_day: int
    period_end_day: int


def month_name(month: int) -> str:
    """English month name for 1-12."""
    return MONTH_NAMES[month - 1]


def days_in_month(year: int, month: int) -> int:
    return monthrange(year, month)[1]


def to_date(value: DateLike) -> date:
    """Accept a date, datetime or ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def normalize_schedule(invoice_days: Iterable[int]) -> List[int]:
    """
    Validate an invoice-day schedule and return it sorted and de-duplicated.

    Raises:
        ConfigurationError: if the schedule is empty or holds anything other
            than integers in 1-31.
    """
    if invoice_days is None:
        raise ConfigurationError("Invoice-day schedule is missing")

    days = list(invoice_days)
    if not days:
        raise ConfigurationError("Invoice-day schedule is empty")

    for day in days:
        if isinstance(day, bool) or not isinstance(day, int) or not 1 <= day <= 31:
            raise ConfigurationError(f"Invalid invoice day {day!r} (expected an integer 1-31)")

    return sorted(set(days))


def resolve_billing_period(task_date: DateLike, invoice_days: Iterable[int]) -> BillingPeriod:
    """
    Resolve the billing period a task date falls into.

    A day before the last invoice day bills on the next invoice day of the
    same month. A day on or after the last invoice day bills on the first
    invoice day of the following month.

    Args:
        task_date: Date the work was logged
        invoice_days: Days of month on which cycles close, in any order

    Returns:
        BillingPeriod with the ISO billing date and a human-readable label
    """
    days = normalize_schedule(invoice_days)
    first_day, last_day = days[0], days[-1]

    task_day = to_date(task_date)
    year, month, day = task_day.year, task_day.month, task_day.day

    if day < last_day:
        billing_day = next(d for d in days if d > day)
        billing_year, billing_month = year, month
    else:
        billing_day = first_day
        if month == 12:
            billing_year, billing_month = year + 1, 1
        else:
            billing_year, billing_month = year, month + 1

    task_month_length = days_in_month(year, month)
    rolled_over = (billing_year, billing_month) != (year, month)

    if billing_day == first_day and rolled_over:
        period_start = last_day
        period_end = task_month_length
    else:
        index = days.index(billing_day)
        # index 0 wraps around to the last invoice day
        previous_day = days[index - 1]
        if previous_day == first_day and billing_day != first_day:
            period_start = 1
        else:
            period_start = previous_day
        period_end = min(billing_day - 1, task_month_length)

    # Invoice days past the end of a short month close on its last day
    billed_day = min(billing_day, days_in_month(billing_year, billing_month))

    label = (
        f"{month_name(month)} {period_start}-{period_end} "
        f"(Billed: {month_name(billing_month)} {billed_day})"
    )

    return BillingPeriod(
        billing_date=f"{billing_year:04d}-{billing_month:02d}-{billed_day:02d}",
        period_label=label,
        period_start_day=period_start,
        period_end_day=period_end,
    )


def calculate_due_date(billing_date: DateLike, payment_term_days: int) -> str:
    """
    Add payment terms (calendar days, e.g. Net 15) to a billing date.

    Returns:
        Due date as ``YYYY-MM-DD``
    """
    if isinstance(payment_term_days, bool) or not isinstance(payment_term_days, int) or payment_term_days < 0:
        raise ConfigurationError(f"Invalid payment terms: {payment_term_days!r}")

    due = to_date(billing_date) + timedelta(days=payment_term_days)
    return due.isoformat()


def format_long_date(value: DateLike) -> str:
    """'2024-01-15' -> 'January 15, 2024'."""
    d = to_date(value)
    return f"{month_name(d.month)} {d.day}, {d.year}"
