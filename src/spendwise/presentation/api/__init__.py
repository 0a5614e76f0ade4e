"""HTTP API for the trash."""
