"""SQLAlchemy persistence for the ledger."""
