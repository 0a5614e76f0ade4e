"""Trash DTOs."""

from spendwise.application.dtos.trash.trash_listing_dto import (
    RestoreErrorDTO,
    TombstoneListItemDTO,
    TrashListingDTO,
)

__all__ = ["RestoreErrorDTO", "TombstoneListItemDTO", "TrashListingDTO"]
