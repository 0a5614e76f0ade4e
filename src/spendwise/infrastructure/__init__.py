"""Infrastructure layer - adapters for persistence media and the ledger."""
