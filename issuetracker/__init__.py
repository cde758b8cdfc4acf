"""
Issue Tracker Core Library.

This package provides the core functionality for the Issue Tracker,
including database management, models, repositories, services, and logging.

Usage:
    # Database
    from issuetracker.db import db, get_db
    from issuetracker.models import User, Project, Issue, Comment
    from issuetracker.repositories import IssueRepository, UserRepository

    # Services
    from issuetracker.services import IssueService, CommentService

    # Config
    from issuetracker.config import get_settings, Settings

    # Logging
    from issuetracker.logging import get_logger, configure_logging
"""

__version__ = "1.0.0"

# Lazy imports to avoid circular dependencies
# Users should import directly from submodules:
#   from issuetracker.db import db
#   from issuetracker.config import get_settings
#   from issuetracker.logging import get_logger
