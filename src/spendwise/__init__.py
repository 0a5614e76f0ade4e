"""Spendwise trash backend."""
