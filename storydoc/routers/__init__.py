"""API routers package."""

from .conversions import router as conversions_router

__all__ = [
    "conversions_router",
]
