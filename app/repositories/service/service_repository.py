# app/repositories/service/service_repository.py
"""
Add-on service repository.
"""

from typing import Dict, List, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.service.service import Service
from app.repositories.base.base_repository import BaseRepository


class ServiceRepository(BaseRepository[Service]):
    """Repository for sellable services."""

    def __init__(self, db: Session):
        super().__init__(Service, db)

    def find_by_ids(self, service_ids: Sequence[str]) -> Dict[str, Service]:
        if not service_ids:
            return {}
        query = select(Service).where(Service.id.in_(list(service_ids)))
        return {service.id: service for service in self.db.execute(query).scalars().all()}

    def list_active(self) -> List[Service]:
        query = select(Service).where(Service.is_active.is_(True)).order_by(Service.name)
        return list(self.db.execute(query).scalars().all())
