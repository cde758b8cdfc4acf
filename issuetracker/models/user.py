"""
User-related SQLAlchemy models.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from issuetracker.roles import Capability, Role, has_capability

from .base import Base

if TYPE_CHECKING:
    from .project import ProjectContributor


class User(Base):
    """
    User model. The role tag decides which issue mutations the user may perform.

    Attributes:
        username: Unique login name, used as the label in statistics
        role: Role tag looked up in the capability table
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    username: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    role: Mapped[Role] = mapped_column(
        Enum(Role, native_enum=False, length=32), default=Role.USER, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    contributions: Mapped[list["ProjectContributor"]] = relationship(
        "ProjectContributor", back_populates="contributor", cascade="all, delete-orphan"
    )

    def can(self, capability: Capability) -> bool:
        """Check whether this user's role grants a capability."""
        return has_capability(self.role, capability)

    @property
    def is_developer(self) -> bool:
        return self.role == Role.DEVELOPER

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r} role={self.role}>"
