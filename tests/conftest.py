"""
Worklog Test Configuration

Shared fixtures for all tests.
"""
import os
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from worklog.config import BillingConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep WORKLOG_* variables from the outer shell out of the tests."""
    for key in list(os.environ):
        if key.startswith("WORKLOG"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def config() -> BillingConfig:
    """Default schedule [1, 15], Net 15, two configured clients."""
    from tests.fixtures.billing import SAMPLE_CONFIG
    return BillingConfig.model_validate(SAMPLE_CONFIG)


@pytest.fixture
def sample_tasks():
    from tests.fixtures.billing import sample_task_records
    return sample_task_records()


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Temp dir with config.yaml and data/tasks.json; cwd set to it."""
    from tests.fixtures.billing import create_temp_config, create_temp_tasks

    config_path = create_temp_config(tmp_path)
    data_path = create_temp_tasks(tmp_path)
    monkeypatch.chdir(tmp_path)
    return {"root": tmp_path, "config": config_path, "data": data_path}
