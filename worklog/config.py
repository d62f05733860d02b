"""Configuration for rates, activity types and the billing schedule.

Loads from a YAML config file with environment variable overrides.
Pattern: WORKLOG__{FIELD}=value overrides a top-level key.
Example: WORKLOG__INVOICE_DAYS=1,10,20

JSON is a subset of YAML, so a ``config.json`` with camelCase keys
loads as well. The returned ``BillingConfig`` is passed explicitly to
every call that needs it; nothing is cached at module level.
"""

import logging
import os
import shutil
from decimal import Decimal
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from worklog.billing.calendar import normalize_schedule
from worklog.common.errors import ConfigurationError
from worklog.common.models import ClientRate

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config.yaml"
EXAMPLE_CONFIG_FILE = "config.example.yaml"
ENV_PREFIX = "WORKLOG"

DEFAULT_ACTIVITY_TYPES = ["Code Review", "Implementation", "Meetings/Syncs", "Planning"]

# Overrides for these fields are comma-separated
LIST_FIELDS = {"activity_types", "invoice_days"}


class BillingConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    clients: list[ClientRate] = []
    activity_types: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ACTIVITY_TYPES),
        alias="activityTypes",
        min_length=1,
    )
    default_rate: Decimal = Field(default=Decimal("100"), alias="defaultRate", gt=0)
    invoice_days: list[int] = Field(default_factory=lambda: [1, 15], alias="invoiceDates")
    payment_terms: int = Field(default=15, alias="paymentTerms", gt=0, description="Net days")

    @field_validator("invoice_days")
    @classmethod
    def _check_schedule(cls, value: list[int]) -> list[int]:
        # ConfigurationError is a ValueError, so pydantic reports it as a validation error
        return normalize_schedule(value)


def _validate_fields(raw: dict) -> BillingConfig:
    """Validate field by field; an invalid field falls back to its default."""
    accepted = {}
    for name, info in BillingConfig.model_fields.items():
        key = next((k for k in (info.alias, name) if k and k in raw), None)
        if key is None:
            continue
        try:
            BillingConfig.model_validate({key: raw[key]})
        except ValidationError as e:
            logger.warning(f"Invalid {key} configuration, using default ({e.error_count()} error(s))")
            continue
        accepted[key] = raw[key]
    return BillingConfig.model_validate(accepted)


def _apply_env_overrides(config_dict: dict, prefix: str = ENV_PREFIX) -> dict:
    """Apply environment variable overrides to config dict.

    Pattern: WORKLOG__FIELD=value maps to config[field] = value
    """
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}__"):
            continue
        name = key[len(prefix) + 2:].lower()
        info = BillingConfig.model_fields.get(name)
        if info is None:
            logger.warning(f"Ignoring unknown config override {key}")
            continue
        if name in LIST_FIELDS:
            value = [part.strip() for part in value.split(",") if part.strip()]
        if info.alias:
            config_dict.pop(info.alias, None)
        config_dict[name] = value
        logger.debug(f"Config override from environment: {name}")
    return config_dict


def _read_yaml(path: Path) -> dict:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        logger.warning(f"Error reading config file {path}: {e}. Using default configuration.")
        return {}
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Config file {path} is not a mapping. Using default configuration.")
        return {}
    return data


def resolve_config_path(config_path: Optional[Union[str, Path]] = None) -> Path:
    if config_path is None:
        config_path = os.getenv(f"{ENV_PREFIX}_CONFIG", DEFAULT_CONFIG_FILE)
    return Path(config_path)


def load_config(config_path: Optional[Union[str, Path]] = None) -> BillingConfig:
    """Load configuration from YAML file with env overrides.

    Priority: env vars > YAML file > defaults

    A missing config file is created from ``config.example.yaml`` in the same
    directory when that exists; otherwise defaults are used.
    """
    path = resolve_config_path(config_path)
    config_dict = {}

    if path.exists():
        config_dict = _read_yaml(path)
    else:
        example = path.with_name(EXAMPLE_CONFIG_FILE)
        if example.exists():
            logger.warning(f"Config file not found. Creating {path} from {example.name}...")
            shutil.copyfile(example, path)
            config_dict = _read_yaml(path)
        else:
            logger.warning(f"Config file {path} not found. Using default configuration.")

    config_dict = _apply_env_overrides(dict(config_dict))
    config = _validate_fields(config_dict)
    logger.debug(
        f"Config loaded: {len(config.clients)} client(s), invoice days {config.invoice_days}, "
        f"net {config.payment_terms}"
    )
    return config
