"""Shared models, errors and storage."""
