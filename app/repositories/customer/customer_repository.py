# app/repositories/customer/customer_repository.py
"""
Customer directory repository.
"""

from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.customer.customer import Customer
from app.repositories.base.base_repository import BaseRepository


class CustomerRepository(BaseRepository[Customer]):

    def __init__(self, db: Session):
        super().__init__(Customer, db)

    def list_customers(self, skip: int = 0, limit: int = 100) -> List[Customer]:
        query = select(Customer).order_by(Customer.last_name, Customer.first_name).offset(skip).limit(limit)
        return list(self.db.execute(query).scalars().all())
