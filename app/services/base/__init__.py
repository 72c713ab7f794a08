"""
Base service components shared by every service in the engine.
"""

from app.services.base.base_service import BaseService, track_performance

__all__ = ["BaseService", "track_performance"]
