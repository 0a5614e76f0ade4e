"""Application ports."""

from spendwise.application.ports.identity import CurrentUser

__all__ = ["CurrentUser"]
