"""
Repository layer for the TutorLink platform.

Repositories encapsulate data access; services decide transaction
boundaries and business rules.
"""

from .base_repository import BaseRepository
from .factory import RepositoryFactory

__all__ = ["BaseRepository", "RepositoryFactory"]
