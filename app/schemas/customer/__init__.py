from app.schemas.customer.customer_schemas import CustomerCreate, CustomerResponse

__all__ = ["CustomerCreate", "CustomerResponse"]
