from app.models.service.service import Service

__all__ = ["Service"]
