"""Task logging, rate lookup and per-period summaries."""

from .rates import get_available_clients, get_hour_limit_for_client, get_rate_for_client
from .service import (
    ClientSummary,
    PeriodSummary,
    TaskInput,
    create_task,
    limit_status,
    log_task,
    summarize_tasks,
)

__all__ = [
    'ClientSummary',
    'PeriodSummary',
    'TaskInput',
    'create_task',
    'get_available_clients',
    'get_hour_limit_for_client',
    'get_rate_for_client',
    'limit_status',
    'log_task',
    'summarize_tasks',
]
