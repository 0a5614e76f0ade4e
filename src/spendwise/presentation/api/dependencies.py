"""FastAPI dependency injection for the Spendwise trash API.

Provides dependencies for:
- Settings and the database session maker held on the app state
- The current user, taken from the ``X-User-Id`` header
- User-scoped repository factories
- The per-user trash facade
"""

import logging
from pathlib import Path
from typing import Annotated, Optional
from uuid import UUID

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from spendwise.application.ports.identity import CurrentUser as CurrentUserModel
from spendwise.application.services import TrashFacade, TrashSessionRegistry
from spendwise.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyRepositoryFactory,
)
from spendwise_config.settings import Settings

logger = logging.getLogger(__name__)

USER_ID_HEADER = "X-User-Id"


# -----------------------------------------------------------------------------
# Database Engine & Session
# -----------------------------------------------------------------------------


def create_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async database engine for one application instance.

    Returns
    -------
    AsyncEngine instance
    """
    url = settings.database_url

    # Ensure data directory exists for SQLite
    if settings.database_type == "sqlite" and ":memory:" not in url:
        db_path = url.split("///")[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return create_async_engine(url, echo=settings.debug, pool_pre_ping=True)


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


def create_session_registry(
    settings: Settings,
    session_maker: async_sessionmaker[AsyncSession],
) -> TrashSessionRegistry:
    """Registry building one trash facade per user on first request."""

    def build_facade(user: CurrentUserModel) -> TrashFacade:
        factory = SQLAlchemyRepositoryFactory(
            session_maker=session_maker,
            current_user=user,
            trash_data_dir=settings.trash_data_dir,
            ledger_timeout=settings.ledger_timeout_seconds,
        )
        return TrashFacade.from_factory(
            factory,
            retention_days=settings.trash_retention_days,
        )

    return TrashSessionRegistry(
        build_facade,
        max_sessions=settings.trash_max_sessions,
    )


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session_maker(request: Request) -> async_sessionmaker[AsyncSession]:
    return request.app.state.session_maker


AppSettings = Annotated[Settings, Depends(get_app_settings)]
SessionMaker = Annotated[async_sessionmaker[AsyncSession], Depends(get_session_maker)]


# -----------------------------------------------------------------------------
# Current User
# -----------------------------------------------------------------------------


async def get_current_user(
    x_user_id: Annotated[Optional[str], Header(alias=USER_ID_HEADER)] = None,
) -> CurrentUserModel:
    """
    Identify the caller from the ``X-User-Id`` header.

    Authentication happens in front of this service; the header carries the
    already authenticated user's id.

    Raises
    ------
    HTTPException
        401 if the header is missing, 400 if it is not a UUID
    """
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {USER_ID_HEADER} header",
        )
    try:
        user_id = UUID(x_user_id)
    except ValueError as e:
        logger.warning("Rejected malformed user id: %r", x_user_id)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{USER_ID_HEADER} must be a UUID",
        ) from e
    return CurrentUserModel(user_id=user_id)


# Type alias for injected current user
CurrentUser = Annotated[CurrentUserModel, Depends(get_current_user)]


# -----------------------------------------------------------------------------
# Repository Factory & Trash Facade
# -----------------------------------------------------------------------------


async def get_repository_factory(
    user: CurrentUser,
    settings: AppSettings,
    session_maker: SessionMaker,
) -> SQLAlchemyRepositoryFactory:
    """
    Get repository factory for the current user.

    The factory creates user-scoped stores for the trash and the ledger.
    """
    return SQLAlchemyRepositoryFactory(
        session_maker=session_maker,
        current_user=user,
        trash_data_dir=settings.trash_data_dir,
        ledger_timeout=settings.ledger_timeout_seconds,
    )


# Type alias for injected repository factory
RepoFactory = Annotated[SQLAlchemyRepositoryFactory, Depends(get_repository_factory)]


async def get_trash_facade(request: Request, user: CurrentUser) -> TrashFacade:
    """The caller's trash session; created on first use, then reused."""
    registry: TrashSessionRegistry = request.app.state.trash_sessions
    return registry.facade_for(user)


# Type alias for injected trash facade
Trash = Annotated[TrashFacade, Depends(get_trash_facade)]
