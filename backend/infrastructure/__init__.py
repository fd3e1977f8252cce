"""
Infrastructure layer.

Adapters behind the application ports: JSON file stores, the TMDB catalog
client, the SMTP notifier, and env-driven wiring (``bootstrap``).
"""

__all__ = [
    "bootstrap",
    "catalog",
    "config",
    "notification",
    "persistence",
    "utils",
]
