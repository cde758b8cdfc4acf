"""
Issue-related SQLAlchemy models.
"""

from datetime import datetime, timezone
from enum import Enum as PyEnum
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .comment import Comment
    from .project import Project
    from .user import User


class IssueStatus(str, PyEnum):
    """Lifecycle states. Transitions are defined in issuetracker.lifecycle."""

    NEW = "NEW"
    ASSIGNED = "ASSIGNED"
    FIXED = "FIXED"
    RESOLVED = "RESOLVED"
    CLOSE = "CLOSE"
    REOPENED = "REOPENED"


class Priority(str, PyEnum):
    BLOCKER = "BLOCKER"
    CRITICAL = "CRITICAL"
    MAJOR = "MAJOR"
    MINOR = "MINOR"
    TRIVIAL = "TRIVIAL"


DEFAULT_PRIORITY = Priority.MAJOR


class Issue(Base):
    """
    A trackable unit of work owned by a project.

    The reporter and the project are set once at creation. The fixer is
    recorded when the issue moves from ASSIGNED to FIXED.
    """
    __tablename__ = "issues"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    project_id: Mapped[int] = mapped_column(ForeignKey("projects.id", ondelete="CASCADE"), index=True)
    title: Mapped[str] = mapped_column(String(512))
    description: Mapped[str] = mapped_column(Text, default="")
    priority: Mapped[Optional[Priority]] = mapped_column(
        Enum(Priority, native_enum=False, length=16), nullable=True, default=DEFAULT_PRIORITY
    )
    status: Mapped[IssueStatus] = mapped_column(
        Enum(IssueStatus, native_enum=False, length=16), default=IssueStatus.NEW, index=True
    )
    reporter_id: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), index=True)
    assignee_id: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), index=True)
    fixer_id: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime)

    # Relationships
    project: Mapped["Project"] = relationship("Project", back_populates="issues")
    reporter: Mapped[Optional["User"]] = relationship("User", foreign_keys=[reporter_id])
    assignee: Mapped[Optional["User"]] = relationship("User", foreign_keys=[assignee_id])
    fixer: Mapped[Optional["User"]] = relationship("User", foreign_keys=[fixer_id])
    comments: Mapped[List["Comment"]] = relationship(
        "Comment", back_populates="issue", cascade="all, delete-orphan", order_by="Comment.id"
    )

    @property
    def comment_count(self) -> int:
        return len(self.comments)

    def __repr__(self) -> str:
        return f"<Issue id={self.id} title={self.title!r} status={self.status}>"
