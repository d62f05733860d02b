"""Billing-period resolution and task aggregation."""

from .aggregator import (
    InvoiceLineItem,
    Totals,
    compute_totals,
    group_by_client_and_period,
    merge_into_line_items,
    round_money,
)
from .calendar import BillingPeriod, calculate_due_date, resolve_billing_period

__all__ = [
    'BillingPeriod',
    'InvoiceLineItem',
    'Totals',
    'calculate_due_date',
    'compute_totals',
    'group_by_client_and_period',
    'merge_into_line_items',
    'resolve_billing_period',
    'round_money',
]
