# app/services/__init__.py
"""
Service layer root package.

Each subpackage implements application use-cases on top of:

- SQLAlchemy models (app.models.*)
- Repositories (app.repositories.*)
- Pydantic schemas (app.schemas.*)
- Common service infrastructure (app.services.base)

Typical pattern for a service:

    class SomeService(BaseService):
        def __init__(self, db_session: Session) -> None:
            super().__init__(db_session)
            self.bookings = BookingRepository(db_session)

        def some_use_case(...):
            with self.transaction():
                ...
"""
