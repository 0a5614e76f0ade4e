"""Records router: move live ledger records to the trash."""

import logging

from fastapi import APIRouter

from spendwise.application.commands.trash import MoveToTrashCommand
from spendwise.domain.trash.value_objects import EntityKind
from spendwise.presentation.api.dependencies import RepoFactory, Trash
from spendwise.presentation.api.schemas import ErrorResponse, MovedToTrashResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.delete(
    "/{kind}/{record_id}",
    summary="Delete a record, keeping it in the trash",
    responses={
        404: {"model": ErrorResponse, "description": "Record not found"},
        503: {"model": ErrorResponse, "description": "Ledger or trash unavailable"},
    },
)
async def move_to_trash(
    kind: EntityKind,
    record_id: str,
    factory: RepoFactory,
    trash: Trash,
) -> MovedToTrashResponse:
    # Share the session's store so writes to a kind stay serialized
    command = MoveToTrashCommand.from_factory(
        factory,
        tombstone_store=trash.tombstone_store,
    )
    tombstone = await command.execute(kind, record_id)
    return MovedToTrashResponse.from_tombstone(tombstone)
