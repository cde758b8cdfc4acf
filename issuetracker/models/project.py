"""
Project-related SQLAlchemy models.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .issue import Issue
    from .user import User


class Project(Base):
    """
    A project owned by an admin user. Issues belong to exactly one project.
    """

    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255))
    admin_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    admin: Mapped["User"] = relationship("User")
    contributors: Mapped[list["ProjectContributor"]] = relationship(
        "ProjectContributor", back_populates="project", cascade="all, delete-orphan"
    )
    issues: Mapped[list["Issue"]] = relationship(
        "Issue", back_populates="project", cascade="all, delete-orphan"
    )

    def add_contributor(self, user: "User") -> "ProjectContributor":
        """Link a user to this project as a contributor."""
        link = ProjectContributor(project=self, contributor=user)
        self.contributors.append(link)
        return link


class ProjectContributor(Base):
    """
    Join entity linking a contributor to a project.
    """

    __tablename__ = "project_contributors"
    __table_args__ = (
        UniqueConstraint("project_id", "contributor_id", name="uq_project_contributors_pair"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    project_id: Mapped[int] = mapped_column(ForeignKey("projects.id", ondelete="CASCADE"), index=True)
    contributor_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)

    project: Mapped[Project] = relationship("Project", back_populates="contributors")
    contributor: Mapped["User"] = relationship("User", back_populates="contributions")
