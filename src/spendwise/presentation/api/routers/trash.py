"""Trash router: list, select, purge and restore deleted records."""

import logging
from typing import Optional

from fastapi import APIRouter, status

from spendwise.application.services import TrashFacade
from spendwise.domain.trash.exceptions import TombstoneNotFoundError
from spendwise.domain.trash.value_objects import TombstoneKey
from spendwise.presentation.api.dependencies import Trash
from spendwise.presentation.api.schemas import (
    ErrorResponse,
    PurgeResponse,
    RestoreResponse,
    SelectionResponse,
    ToggleSelectionRequest,
    TrashListingResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _selection(
    trash: TrashFacade,
    is_selected: Optional[bool] = None,
) -> SelectionResponse:
    return SelectionResponse(
        selected_keys=[str(key) for key in sorted(trash.selected_keys, key=str)],
        all_selected=trash.is_all_selected,
        is_selected=is_selected,
    )


@router.get(
    "",
    summary="List the trash",
    responses={503: {"model": ErrorResponse}},
)
async def list_trash(trash: Trash) -> TrashListingResponse:
    """
    List every tombstone, newest deletion first.

    Each entry shows how many days remain before it may be purged and, if
    its last restore failed, why.
    """
    return TrashListingResponse.from_dto(await trash.listing())


@router.post(
    "/selection/toggle",
    summary="Toggle selection of one entry",
    responses={
        400: {"model": ErrorResponse, "description": "Malformed key"},
        404: {"model": ErrorResponse, "description": "Key not in the last listing"},
    },
)
async def toggle_selection(
    request: ToggleSelectionRequest,
    trash: Trash,
) -> SelectionResponse:
    key = TombstoneKey.parse(request.key)
    await trash.refresh()
    is_selected = trash.toggle_select(key)
    return _selection(trash, is_selected)


@router.post("/selection/all", summary="Select every listed entry")
async def select_all(trash: Trash) -> SelectionResponse:
    await trash.refresh()
    trash.select_all()
    return _selection(trash)


@router.delete("/selection", summary="Clear the selection")
async def clear_selection(trash: Trash) -> SelectionResponse:
    trash.clear_selection()
    return _selection(trash)


@router.post(
    "/purge",
    summary="Permanently delete the selected entries",
    responses={503: {"model": ErrorResponse, "description": "Selection kept"}},
)
async def purge_selected(trash: Trash) -> PurgeResponse:
    purged = await trash.purge_selected()
    return PurgeResponse(purged=purged)


@router.post(
    "/purge-expired",
    summary="Permanently delete entries past the retention period",
)
async def purge_expired(trash: Trash) -> PurgeResponse:
    purged = await trash.purge_expired()
    return PurgeResponse(purged=purged)


@router.delete(
    "/{key}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Permanently delete one entry",
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def purge_one(key: str, trash: Trash) -> None:
    tombstone_key = TombstoneKey.parse(key)
    if not await trash.purge(tombstone_key):
        raise TombstoneNotFoundError(tombstone_key)


@router.post(
    "/{key}/restore",
    summary="Restore one entry into the ledger",
    responses={
        404: {"model": ErrorResponse},
        409: {
            "model": ErrorResponse,
            "description": "Already restoring, or only partly restored (see details)",
        },
        502: {"model": ErrorResponse, "description": "Ledger rejected the restore"},
    },
)
async def restore(key: str, trash: Trash) -> RestoreResponse:
    """
    Recreate the record in the ledger and drop it from the trash.

    A failed or partial restore keeps the entry in the trash.
    """
    result = await trash.restore(TombstoneKey.parse(key))
    if result.error is not None:
        raise result.error
    return RestoreResponse.from_result(result)
