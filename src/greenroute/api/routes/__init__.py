"""Route group exports."""

from . import health, routes, tracking

__all__ = ["routes", "tracking", "health"]
