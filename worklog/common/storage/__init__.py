"""Storage layer for logged tasks."""

from .backend import TaskStore
from .json_store import JsonTaskStore

__all__ = ['TaskStore', 'JsonTaskStore']
