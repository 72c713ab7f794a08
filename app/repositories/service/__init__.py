from app.repositories.service.service_repository import ServiceRepository

__all__ = ["ServiceRepository"]
