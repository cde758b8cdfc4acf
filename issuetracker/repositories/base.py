"""Base repository class with common CRUD operations."""

from typing import Generic, TypeVar

from sqlalchemy import func
from sqlalchemy.orm import Session

from issuetracker.db import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """
    Base repository providing common CRUD operations.

    Usage:
        class UserRepository(BaseRepository[User]):
            model = User

        repo = UserRepository(session)
        user = repo.get_by_id(1)
    """

    model: type[T]

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, id: int) -> T | None:
        """Get a single record by ID. Returns None on a miss."""
        return self.session.get(self.model, id)

    def list_all(self) -> list[T]:
        """Get every record in ID order."""
        return self.session.query(self.model).order_by(self.model.id).all()  # type: ignore[attr-defined]

    def save(self, instance: T) -> T:
        """Insert or update a record and flush so generated values are populated."""
        self.session.add(instance)
        self.session.flush()
        return instance

    def delete(self, instance: T) -> T:
        """Delete a loaded record. The instance keeps its attribute values."""
        self.session.delete(instance)
        self.session.flush()
        return instance

    def count(self, **filters) -> int:
        """Get count of records, optionally filtered by column equality."""
        query = self.session.query(func.count(self.model.id))  # type: ignore[attr-defined]
        for key, value in filters.items():
            if not hasattr(self.model, key):
                raise ValueError(f"Unknown filter key for {self.model.__name__}: {key}")
            query = query.filter(getattr(self.model, key) == value)
        return query.scalar() or 0

    def exists(self, id: int) -> bool:
        """Check if a record exists."""
        result = self.session.query(
            self.session.query(self.model).filter(self.model.id == id).exists()  # type: ignore[attr-defined]
        ).scalar()
        return bool(result) if result is not None else False
