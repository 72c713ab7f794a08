from app.repositories.customer.customer_repository import CustomerRepository

__all__ = ["CustomerRepository"]
