"""Application factories."""

from spendwise.application.factories.repository_factory import RepositoryFactory

__all__ = ["RepositoryFactory"]
