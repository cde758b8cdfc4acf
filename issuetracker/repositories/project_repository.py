"""Project and contributor repositories."""

from issuetracker.models import Project, ProjectContributor, User

from .base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project operations."""

    model = Project


class ProjectContributorRepository(BaseRepository[ProjectContributor]):
    """Repository for the project/contributor join entity."""

    model = ProjectContributor

    def find_all_by_contributor(self, contributor: User) -> list[ProjectContributor]:
        """Get every project link of a contributor."""
        return (
            self.session.query(ProjectContributor)
            .filter(ProjectContributor.contributor_id == contributor.id)
            .order_by(ProjectContributor.id)
            .all()
        )

    def project_ids_of(self, contributor: User) -> set[int]:
        """IDs of the projects a user contributes to."""
        return {link.project_id for link in self.find_all_by_contributor(contributor)}
