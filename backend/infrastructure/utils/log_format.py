from __future__ import annotations

import json
from datetime import datetime
from enum import Enum
from typing import Any


def _format_value(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, datetime):
        value = value.isoformat()
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return json.dumps(sorted(value) if isinstance(value, (set, frozenset)) else list(value), ensure_ascii=False, default=str)
    # Quote strings so spaces/symbols stay readable and unambiguous
    return json.dumps(str(value), ensure_ascii=False)


def format_kv(**fields: Any) -> str:
    """
    Render a compact single-line key=value log string; None values are dropped.

    Example:
      event="add" catalog_id="42" media_type="movie" size=3
    """
    return " ".join(f"{key}={_format_value(value)}" for key, value in fields.items() if value is not None)
