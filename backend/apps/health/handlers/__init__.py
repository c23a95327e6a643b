"""Health handlers."""

from apps.health.handlers.check_health import check_health

__all__ = ["check_health"]
