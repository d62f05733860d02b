"""Invoice assembly."""

from .service import (
    Invoice,
    InvoiceService,
    build_invoice,
    list_billing_dates_for_client,
    list_client_names,
)

__all__ = [
    'Invoice',
    'InvoiceService',
    'build_invoice',
    'list_billing_dates_for_client',
    'list_client_names',
]
