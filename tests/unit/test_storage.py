#!/usr/bin/env python3
"""
Unit Tests for Task Storage

Tests the JSON task file: on-disk shape, loading and appending.
"""

import json
import pytest
from datetime import date
from decimal import Decimal

from pydantic import ValidationError

from tests.fixtures.billing import SAMPLE_TASKS, create_temp_tasks, make_task
from worklog.common.errors import StorageError
from worklog.common.models import TaskRecord
from worklog.common.storage import JsonTaskStore


class TestTaskRecord:
    """Tests for the persisted task model."""

    def test_parses_camel_case(self):
        task = TaskRecord.model_validate(SAMPLE_TASKS[0])

        assert task.activity_type == "Implementation"
        assert task.ticket_reference == "TICKET-123"
        assert task.hours_worked == Decimal("2.5")
        assert task.date == date(2024, 1, 5)
        assert task.amount == Decimal("250")

    def test_blank_ticket_is_none(self):
        task = TaskRecord.model_validate(dict(SAMPLE_TASKS[2], ticketNumber="  "))
        assert task.ticket_reference is None

    def test_rejects_non_positive_hours(self):
        with pytest.raises(ValidationError):
            TaskRecord.model_validate(dict(SAMPLE_TASKS[0], hoursWorked=0))

    def test_to_dict_shape(self):
        data = make_task("2024-01-05", ticket="ABC-1", hours="2.5", rate=150, task_id="x").to_dict()

        assert data == {
            "id": "x",
            "date": "2024-01-05",
            "time": "12:00:00",
            "activityType": "Implementation",
            "ticketNumber": "ABC-1",
            "hoursWorked": 2.5,
            "client": "Client A",
            "rate": 150.0,
        }

    def test_to_dict_omits_missing_ticket(self):
        assert "ticketNumber" not in make_task().to_dict()


class TestJsonTaskStore:
    """Tests for JsonTaskStore."""

    def test_missing_file_is_empty(self, tmp_path):
        assert JsonTaskStore(tmp_path / "none.json").load() == []

    def test_load_existing(self, tmp_path):
        store = JsonTaskStore(create_temp_tasks(tmp_path))
        tasks = store.load()

        assert [t.id for t in tasks] == ["t-1", "t-2", "t-3", "t-4", "t-5"]

    def test_add_creates_directory(self, tmp_path):
        path = tmp_path / "nested" / "data" / "tasks.json"
        store = JsonTaskStore(path)
        store.add(make_task(task_id="a"))

        assert path.exists()
        assert [t.id for t in store.load()] == ["a"]

    def test_add_appends_in_order(self, tmp_path):
        store = JsonTaskStore(create_temp_tasks(tmp_path))
        store.add(make_task(task_id="t-6"))

        assert [t.id for t in store.load()][-2:] == ["t-5", "t-6"]

    def test_file_is_json_array(self, tmp_path):
        path = tmp_path / "tasks.json"
        JsonTaskStore(path).add(make_task(task_id="a", hours="0.5"))

        with open(path) as f:
            raw = json.load(f)
        assert isinstance(raw, list)
        assert raw[0]["hoursWorked"] == 0.5

    def test_default_path_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("WORKLOG_DATA", str(tmp_path / "custom.json"))
        assert JsonTaskStore().path == tmp_path / "custom.json"

    def test_malformed_record_raises(self, tmp_path):
        path = create_temp_tasks(tmp_path, [dict(SAMPLE_TASKS[0], hoursWorked=-1)])
        with pytest.raises(ValidationError):
            JsonTaskStore(path).load()

    @pytest.mark.parametrize("content", [b"{not json", b"[\xff\xfe]"])
    def test_undecodable_file_raises(self, tmp_path, content):
        path = tmp_path / "tasks.json"
        path.write_bytes(content)
        with pytest.raises(StorageError):
            JsonTaskStore(path).load()
