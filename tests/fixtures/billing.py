# Billing Test Fixtures
# Used by tests/unit/test_*.py

import json
from datetime import date
from pathlib import Path

from worklog.common.models import TaskRecord

# Sample config.yaml content (snake_case keys)
SAMPLE_CONFIG = {
    "clients": [
        {"client": "Client A", "rate": 150, "hour_limit": 40},
        {"client": "Client B", "rate": 120},
    ],
    "activity_types": ["Code Review", "Implementation", "Meetings/Syncs", "Planning"],
    "default_rate": 100,
    "invoice_days": [1, 15],
    "payment_terms": 15,
}

# Same content in the camelCase config.json shape
SAMPLE_CONFIG_CAMEL = {
    "clients": [
        {"client": "Client A", "rate": 150, "hourLimit": 40},
        {"client": "Client B", "rate": 120},
    ],
    "activityTypes": ["Code Review", "Implementation", "Meetings/Syncs", "Planning"],
    "defaultRate": 100,
    "invoiceDates": [15, 1],
    "paymentTerms": 30,
}

# Sample tasks.json content
SAMPLE_TASKS = [
    {
        "id": "t-1",
        "date": "2024-01-05",
        "time": "14:30:00",
        "activityType": "Implementation",
        "ticketNumber": "TICKET-123",
        "hoursWorked": 2.5,
        "client": "Client A",
        "rate": 100,
    },
    {
        "id": "t-2",
        "date": "2024-01-03",
        "time": "09:00:00",
        "activityType": "Implementation",
        "ticketNumber": "TICKET-123",
        "hoursWorked": 1.5,
        "client": "Client A",
        "rate": 100,
    },
    {
        "id": "t-3",
        "date": "2024-01-10",
        "time": "10:00:00",
        "activityType": "Code Review",
        "hoursWorked": 1,
        "client": "Client A",
        "rate": 100,
    },
    {
        "id": "t-4",
        "date": "2024-01-20",
        "time": "11:00:00",
        "activityType": "Planning",
        "hoursWorked": 3,
        "client": "Client A",
        "rate": 100,
    },
    {
        "id": "t-5",
        "date": "2024-01-08",
        "time": "16:15:00",
        "activityType": "Meetings/Syncs",
        "hoursWorked": 0.5,
        "client": "Client B",
        "rate": 120,
    },
]


def make_task(
    task_date="2024-01-05",
    activity_type="Implementation",
    ticket=None,
    hours=1,
    client="Client A",
    rate=100,
    task_id=None,
    time="12:00:00",
) -> TaskRecord:
    """Build a TaskRecord with sensible defaults."""
    if isinstance(task_date, str):
        task_date = date.fromisoformat(task_date)
    return TaskRecord(
        id=task_id or f"{client}-{task_date.isoformat()}-{activity_type}-{ticket}-{hours}",
        date=task_date,
        time=time,
        activity_type=activity_type,
        ticket_reference=ticket,
        hours_worked=hours,
        client=client,
        rate=rate,
    )


def sample_task_records() -> list:
    return [TaskRecord.model_validate(raw) for raw in SAMPLE_TASKS]


def create_temp_config(tmp_path: Path, config: dict = None, name: str = "config.yaml") -> Path:
    """Write a config file and return its path."""
    import yaml

    path = tmp_path / name
    with open(path, "w") as f:
        yaml.safe_dump(config if config is not None else SAMPLE_CONFIG, f)
    return path


def create_temp_tasks(tmp_path: Path, tasks: list = None) -> Path:
    """Write a tasks.json file and return its path."""
    data_dir = tmp_path / "data"
    data_dir.mkdir(parents=True, exist_ok=True)
    path = data_dir / "tasks.json"
    with open(path, "w") as f:
        json.dump(tasks if tasks is not None else SAMPLE_TASKS, f, indent=2)
    return path
