"""
TASK AGGREGATION
================
Groups tasks by client and billing period, and merges the tasks of one
period into invoice line items.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Optional, Union

from worklog.common.models import TaskRecord

from .calendar import normalize_schedule, resolve_billing_period

# client -> billing date -> tasks
PeriodGrouping = Dict[str, Dict[str, List[TaskRecord]]]

CENT = Decimal("0.01")


@dataclass
class InvoiceLineItem:
    activity_type: str
    ticket_reference: Optional[str]
    total_hours: Decimal
    rate: Decimal
    earliest_date: date
    tasks: List[TaskRecord] = field(default_factory=list)

    @property
    def key(self) -> str:
        return merge_key(self.activity_type, self.ticket_reference)

    @property
    def amount(self) -> Decimal:
        return sum((t.hours_worked * t.rate for t in self.tasks), Decimal("0"))

    @property
    def has_mixed_rates(self) -> bool:
        """True when merged tasks carry different rate snapshots."""
        return len({t.rate for t in self.tasks}) > 1


@dataclass
class Totals:
    total_hours: Decimal
    total_amount: Decimal
    task_count: int


def merge_key(activity_type: str, ticket_reference: Optional[str]) -> str:
    return f"{activity_type}|{ticket_reference or ''}"


def round_money(value: Decimal) -> Decimal:
    """Round to cents; presentation only."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def group_by_client_and_period(
    tasks: Iterable[TaskRecord],
    invoice_days: Iterable[int],
) -> PeriodGrouping:
    """
    Group tasks by client, then by resolved billing date.

    Bucket order follows input order.

    Returns:
        Nested dict: {client: {billing_date: [tasks]}}
    """
    days = normalize_schedule(invoice_days)
    grouped = defaultdict(lambda: defaultdict(list))

    for task in tasks:
        period = resolve_billing_period(task.date, days)
        grouped[task.client][period.billing_date].append(task)

    return {client: dict(periods) for client, periods in grouped.items()}


def merge_into_line_items(tasks: Iterable[TaskRecord]) -> List[InvoiceLineItem]:
    """
    Merge one period's tasks into line items keyed by (activity, ticket).

    Tasks without a ticket merge under an empty ticket key. The first task
    seen in a group sets the line rate.

    Returns:
        Line items sorted by earliest date, then activity type
    """
    merged: Dict[str, InvoiceLineItem] = {}

    for task in tasks:
        key = merge_key(task.activity_type, task.ticket_reference)
        item = merged.get(key)
        if item is None:
            item = InvoiceLineItem(
                activity_type=task.activity_type,
                ticket_reference=task.ticket_reference,
                total_hours=Decimal("0"),
                rate=task.rate,
                earliest_date=task.date,
            )
            merged[key] = item

        item.total_hours += task.hours_worked
        item.tasks.append(task)
        if task.date < item.earliest_date:
            item.earliest_date = task.date

    return sorted(merged.values(), key=lambda i: (i.earliest_date, i.activity_type))


def compute_totals(records: Iterable[Union[TaskRecord, InvoiceLineItem]]) -> Totals:
    """
    Sum hours and amount over source tasks.

    Line items are expanded into their tasks, so the amount is always
    sum(hours_worked * rate) per task. Nothing is rounded here.
    """
    total_hours = Decimal("0")
    total_amount = Decimal("0")
    count = 0

    for record in records:
        source = record.tasks if isinstance(record, InvoiceLineItem) else [record]
        for task in source:
            total_hours += task.hours_worked
            total_amount += task.hours_worked * task.rate
            count += 1

    return Totals(total_hours=total_hours, total_amount=total_amount, task_count=count)
