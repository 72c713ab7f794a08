from app.models.customer.customer import Customer

__all__ = ["Customer"]
