"""Client rate lookups against the configured client list."""
from decimal import Decimal
from typing import List, Optional

from worklog.common.models import ClientRate
from worklog.config import BillingConfig


def find_client_rate(config: BillingConfig, client: str) -> Optional[ClientRate]:
    """Case-insensitive match on the trimmed client name."""
    wanted = client.strip().lower()
    return next((cr for cr in config.clients if cr.client.strip().lower() == wanted), None)


def get_rate_for_client(
    config: BillingConfig,
    client: str,
    default_rate: Optional[Decimal] = None,
) -> Decimal:
    """
    Hourly rate for a client.

    Falls back to ``default_rate`` when given, else the configured default.
    """
    client_rate = find_client_rate(config, client)
    if client_rate is not None:
        return client_rate.rate
    if default_rate is not None:
        return Decimal(str(default_rate))
    return config.default_rate


def get_hour_limit_for_client(config: BillingConfig, client: str) -> Optional[Decimal]:
    """Hour limit per billing period, or None if the client has none."""
    client_rate = find_client_rate(config, client)
    return client_rate.hour_limit if client_rate else None


def get_available_clients(config: BillingConfig) -> List[str]:
    return [cr.client for cr in config.clients]
