"""
API v1 package.

This module re-exports the main FastAPI router that aggregates all
v1 sub-routers (catalog, availability, bookings, payments).

The actual router composition lives in `app.api.v1.router`.
"""

from app.api.v1.router import router as api_router

__all__ = ["api_router"]
