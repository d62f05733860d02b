#!/usr/bin/env python3
"""
TIMESHEET SERVICE
=================
Logs work sessions and summarizes them per client and billing period.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Callable, List, Optional, Sequence

from worklog.billing.aggregator import Totals, compute_totals, group_by_client_and_period
from worklog.billing.calendar import resolve_billing_period
from worklog.common.errors import NotFound
from worklog.common.models import TaskRecord
from worklog.common.storage import TaskStore
from worklog.config import BillingConfig

from .rates import get_hour_limit_for_client, get_rate_for_client

logger = logging.getLogger(__name__)

ALL_CLIENTS = "all"

# Remaining hours at or below these thresholds change the limit status
CRITICAL_REMAINING_HOURS = Decimal("2")
WARNING_REMAINING_HOURS = Decimal("4")


@dataclass
class TaskInput:
    """Task details supplied by the user."""
    activity_type: str
    hours_worked: Decimal
    client: str
    ticket_reference: Optional[str] = None


def create_task(
    task_input: TaskInput,
    config: BillingConfig,
    now: Optional[datetime] = None,
    id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
) -> TaskRecord:
    """
    Build a TaskRecord stamped with the local date/time and the client's
    current rate.
    """
    hours = Decimal(str(task_input.hours_worked))
    if hours <= 0:
        raise ValueError(f"Hours worked must be positive, got {task_input.hours_worked}")

    now = now or datetime.now()
    return TaskRecord(
        id=id_factory(),
        date=now.date(),
        time=now.strftime("%H:%M:%S"),
        activity_type=task_input.activity_type.strip(),
        ticket_reference=task_input.ticket_reference,
        hours_worked=hours,
        client=task_input.client.strip(),
        rate=get_rate_for_client(config, task_input.client),
    )


def log_task(
    store: TaskStore,
    task_input: TaskInput,
    config: BillingConfig,
    now: Optional[datetime] = None,
) -> TaskRecord:
    """Create a task and append it to the store."""
    task = create_task(task_input, config, now=now)
    store.add(task)
    logger.info(
        f"Logged {task.hours_worked}h {task.activity_type} for {task.client} "
        f"on {task.date.isoformat()} at {task.rate}/h"
    )
    return task


def limit_status(hour_limit: Optional[Decimal], hours_used: Decimal) -> Optional[str]:
    """
    Classify hours used against a per-period limit.

    Returns:
        None (no limit), 'exceeded', 'critical', 'warning' or 'ok'
    """
    if hour_limit is None:
        return None
    remaining = hour_limit - hours_used
    if remaining <= 0:
        return "exceeded"
    if remaining <= CRITICAL_REMAINING_HOURS:
        return "critical"
    if remaining <= WARNING_REMAINING_HOURS:
        return "warning"
    return "ok"


@dataclass
class PeriodSummary:
    billing_date: str
    period_label: str
    tasks: List[TaskRecord]
    totals: Totals
    hour_limit: Optional[Decimal] = None

    @property
    def remaining_hours(self) -> Optional[Decimal]:
        if self.hour_limit is None:
            return None
        return self.hour_limit - self.totals.total_hours

    @property
    def limit_status(self) -> Optional[str]:
        return limit_status(self.hour_limit, self.totals.total_hours)

    def cumulative_hours(self) -> List[Decimal]:
        """Running hour total after each task row."""
        running = Decimal("0")
        result = []
        for task in self.tasks:
            running += task.hours_worked
            result.append(running)
        return result


@dataclass
class ClientSummary:
    client: str
    hour_limit: Optional[Decimal]
    periods: List[PeriodSummary] = field(default_factory=list)

    @property
    def totals(self) -> Totals:
        return compute_totals(t for p in self.periods for t in p.tasks)


def summarize_tasks(
    tasks: Sequence[TaskRecord],
    config: BillingConfig,
    client: Optional[str] = None,
    billing_date: Optional[str] = None,
) -> List[ClientSummary]:
    """
    Group tasks into per-client, per-period summaries.

    Args:
        tasks: All logged tasks
        config: Supplies the schedule and per-client hour limits
        client: Restrict to one client (None or 'all' for every client)
        billing_date: Restrict to one billing period (YYYY-MM-DD)

    Raises:
        NotFound: if nothing matches the filters
    """
    if not tasks:
        raise NotFound("No tasks recorded yet.")

    selected = list(tasks)
    if client and client != ALL_CLIENTS:
        selected = [t for t in selected if t.client == client]
        if not selected:
            raise NotFound(f'No tasks found for client "{client}".', client=client)

    if billing_date:
        selected = [
            t for t in selected
            if resolve_billing_period(t.date, config.invoice_days).billing_date == billing_date
        ]
        if not selected:
            raise NotFound(
                "No tasks found for the selected billing period.",
                client=client,
                billing_date=billing_date,
            )

    grouped = group_by_client_and_period(selected, config.invoice_days)

    summaries = []
    for name in sorted(grouped):
        hour_limit = get_hour_limit_for_client(config, name)
        summary = ClientSummary(client=name, hour_limit=hour_limit)
        for period_date in sorted(grouped[name]):
            period_tasks = sorted(grouped[name][period_date], key=lambda t: (t.date, t.time))
            label = resolve_billing_period(period_tasks[0].date, config.invoice_days).period_label
            summary.periods.append(PeriodSummary(
                billing_date=period_date,
                period_label=label,
                tasks=period_tasks,
                totals=compute_totals(period_tasks),
                hour_limit=hour_limit,
            ))
        summaries.append(summary)

    return summaries
