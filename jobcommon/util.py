"""General helper routines."""

from __future__ import annotations

import dataclasses
import json
import logging
import secrets
from datetime import date, datetime
from enum import Enum
from typing import Any

from jobcommon.models import ENV_KUBEFLOW_NAMESPACE

__all__ = ["ENV_KUBEFLOW_NAMESPACE", "pformat", "rand_string"]

_log = logging.getLogger(__name__)

_LETTERS = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_json(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    raise TypeError(f"{type(value).__name__} is not JSON serializable")


def pformat(value: Any) -> str:
    """Return an indented JSON rendering of ``value``; strings come back as they are."""
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, indent=2, default=_to_json)
    except (TypeError, ValueError) as err:
        _log.warning("Couldn't pretty format %s, error: %s", value, err)
        return str(value)


def rand_string(n: int) -> str:
    """Return a random string of ``n`` lowercase letters and digits (DNS-1035 safe)."""
    if n < 0:
        raise ValueError("length must not be negative")
    return "".join(secrets.choice(_LETTERS) for _ in range(n))