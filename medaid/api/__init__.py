"""HTTP surface for the plan comparison engines."""

from medaid.api.router import router

__all__ = ["router"]
