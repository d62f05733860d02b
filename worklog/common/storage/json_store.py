"""JSON file task store (one array of task objects)."""
import json
import logging
import os
from pathlib import Path
from typing import List, Optional, Union

from ..errors import StorageError
from ..models import TaskRecord
from .backend import TaskStore

logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE = Path("data") / "tasks.json"


def default_data_path() -> Path:
    """Data file from WORKLOG_DATA, else data/tasks.json."""
    return Path(os.getenv("WORKLOG_DATA", str(DEFAULT_DATA_FILE)))


class JsonTaskStore(TaskStore):
    """Stores tasks as a pretty-printed JSON array, overwritten on every save."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else default_data_path()

    def _ensure_dir(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def load(self) -> List[TaskRecord]:
        if not self.path.exists():
            logger.debug(f"No task file at {self.path}, starting empty")
            return []

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise StorageError(f"Task file {self.path} is not valid JSON: {e}") from e

        tasks = [TaskRecord.model_validate(item) for item in raw]
        logger.debug(f"Loaded {len(tasks)} tasks from {self.path}")
        return tasks

    def save(self, tasks: List[TaskRecord]) -> None:
        self._ensure_dir()
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump([t.to_dict() for t in tasks], f, indent=2, ensure_ascii=False)
        logger.debug(f"Saved {len(tasks)} tasks to {self.path}")
