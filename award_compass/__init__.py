"""Award chart matching and credit-card transfer planning."""

from .repository import DataStoreError, InMemoryRepository, ReferenceRepository
from .search import AwardSearch

__all__ = ["AwardSearch", "DataStoreError", "InMemoryRepository", "ReferenceRepository"]
