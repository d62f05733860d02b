"""Work log: per-client task tracking, billing periods and invoices."""

__version__ = "0.1.0"
