"""Trash domain ports."""

from spendwise.domain.trash.ports.authoritative_store_port import AuthoritativeStore

__all__ = ["AuthoritativeStore"]
