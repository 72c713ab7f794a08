from app.schemas.service.service_schemas import ServiceCreate, ServiceResponse

__all__ = ["ServiceCreate", "ServiceResponse"]
