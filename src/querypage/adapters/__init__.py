"""Repository adapters for the pagination port."""

from .memory import InMemoryPaginationRepository

__all__ = ["InMemoryPaginationRepository"]
