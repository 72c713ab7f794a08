from app.services.catalog.catalog_service import CatalogService

__all__ = ["CatalogService"]
