from __future__ import annotations

from infrastructure.utils.log_format import format_kv  # noqa: F401

__all__ = ["format_kv"]
