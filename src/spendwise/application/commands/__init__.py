"""Application commands - state-changing use cases."""

from spendwise.application.commands.trash import MoveToTrashCommand

__all__ = ["MoveToTrashCommand"]
