"""Application services."""

from spendwise.application.services.trash_facade import TrashFacade
from spendwise.application.services.trash_session_registry import (
    TrashSessionRegistry,
)

__all__ = ["TrashFacade", "TrashSessionRegistry"]
