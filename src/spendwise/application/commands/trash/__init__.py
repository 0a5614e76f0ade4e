"""Trash commands - moving live records into the trash."""

from spendwise.application.commands.trash.move_to_trash_command import (
    MoveToTrashCommand,
)

__all__ = ["MoveToTrashCommand"]
