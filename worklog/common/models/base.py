"""Persisted data models.

Field names are snake_case in Python; the aliases keep the camelCase keys
used in ``tasks.json`` and the config file.
"""
import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class TaskRecord(BaseModel):
    """A logged work session. Immutable once created."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    date: datetime.date
    time: str = ""  # HH:MM:SS, display only
    activity_type: str = Field(..., alias="activityType")
    ticket_reference: Optional[str] = Field(None, alias="ticketNumber")
    hours_worked: Decimal = Field(..., alias="hoursWorked", gt=0)
    client: str
    rate: Decimal = Field(..., ge=0)  # snapshot taken when the task was logged

    @field_validator("ticket_reference", mode="before")
    @classmethod
    def _blank_ticket_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_serializer("hours_worked", "rate", when_used="json")
    def _decimal_as_number(self, value: Decimal) -> float:
        return float(value)

    @property
    def amount(self) -> Decimal:
        return self.hours_worked * self.rate

    def to_dict(self) -> dict:
        """Serialize to the on-disk JSON shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ClientRate(BaseModel):
    """Per-client hourly rate, with an optional hour limit per billing period."""

    model_config = ConfigDict(populate_by_name=True)

    client: str
    rate: Decimal = Field(..., gt=0)
    hour_limit: Optional[Decimal] = Field(None, alias="hourLimit", gt=0)
