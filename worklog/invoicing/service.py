#!/usr/bin/env python3
"""
INVOICING SERVICE
=================
Assembles an invoice for one client and billing period from logged tasks.

Usage:
  from worklog.invoicing.service import InvoiceService

  svc = InvoiceService(store, config)
  for client in svc.list_clients():
      for billing_date in svc.list_billing_dates(client):
          invoice = svc.build(client, billing_date)
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Sequence

from worklog.billing.aggregator import (
    InvoiceLineItem,
    compute_totals,
    group_by_client_and_period,
    merge_into_line_items,
)
from worklog.billing.calendar import calculate_due_date, normalize_schedule, resolve_billing_period
from worklog.common.errors import NotFound
from worklog.common.models import TaskRecord
from worklog.common.storage import TaskStore
from worklog.config import BillingConfig

logger = logging.getLogger(__name__)


@dataclass
class Invoice:
    client: str
    billing_date: str
    due_date: str
    period_label: str
    line_items: List[InvoiceLineItem]
    total_hours: Decimal
    total_amount: Decimal

    @property
    def task_count(self) -> int:
        return sum(len(item.tasks) for item in self.line_items)

    @property
    def mixed_rate_items(self) -> List[InvoiceLineItem]:
        return [item for item in self.line_items if item.has_mixed_rates]


def list_client_names(tasks: Iterable[TaskRecord]) -> List[str]:
    """Distinct client names, sorted."""
    return sorted({task.client for task in tasks})


def list_billing_dates_for_client(
    tasks: Iterable[TaskRecord],
    client: str,
    invoice_days: Iterable[int],
) -> List[str]:
    """Distinct billing dates (YYYY-MM-DD) with tasks for a client, sorted."""
    days = normalize_schedule(invoice_days)
    return sorted({
        resolve_billing_period(task.date, days).billing_date
        for task in tasks
        if task.client == client
    })


def build_invoice(
    all_tasks: Sequence[TaskRecord],
    client: str,
    billing_date: str,
    config: BillingConfig,
) -> Invoice:
    """
    Build the invoice for one client and billing period.

    Args:
        all_tasks: Every logged task (not mutated)
        client: Exact, case-sensitive client name
        billing_date: Billing date as YYYY-MM-DD
        config: Supplies the invoice-day schedule and payment terms

    Raises:
        NotFound: if the client has no tasks, or none in that billing period
        ConfigurationError: if the schedule or payment terms are invalid
    """
    invoice_days = normalize_schedule(config.invoice_days)

    client_tasks = [task for task in all_tasks if task.client == client]
    if not client_tasks:
        raise NotFound(f'No tasks found for client "{client}".', client=client)

    periods = group_by_client_and_period(client_tasks, invoice_days).get(client, {})
    period_tasks = periods.get(billing_date)
    if not period_tasks:
        raise NotFound(
            f'No tasks found for billing period "{billing_date}".',
            client=client,
            billing_date=billing_date,
        )

    line_items = merge_into_line_items(period_tasks)
    totals = compute_totals(period_tasks)
    period = resolve_billing_period(period_tasks[0].date, invoice_days)

    return Invoice(
        client=client,
        billing_date=billing_date,
        due_date=calculate_due_date(billing_date, config.payment_terms),
        period_label=period.period_label,
        line_items=line_items,
        total_hours=totals.total_hours,
        total_amount=totals.total_amount,
    )


class InvoiceService:
    """Loads tasks from a store and assembles invoices with a given config."""

    def __init__(self, store: TaskStore, config: BillingConfig):
        self.store = store
        self.config = config

    def list_clients(self) -> List[str]:
        return list_client_names(self.store.load())

    def list_billing_dates(self, client: str) -> List[str]:
        return list_billing_dates_for_client(self.store.load(), client, self.config.invoice_days)

    def build(self, client: str, billing_date: str) -> Invoice:
        tasks = self.store.load()
        invoice = build_invoice(tasks, client, billing_date, self.config)
        for item in invoice.mixed_rate_items:
            logger.warning(
                f"Line '{item.key}' merges tasks with different rates; "
                f"billing at first rate {item.rate}"
            )
        logger.info(
            f"Invoice for {client} ({billing_date}): {len(invoice.line_items)} line(s), "
            f"{invoice.total_hours} h"
        )
        return invoice
