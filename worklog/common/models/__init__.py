"""Shared data models across modules."""

from .base import ClientRate, TaskRecord

__all__ = ['ClientRate', 'TaskRecord']
