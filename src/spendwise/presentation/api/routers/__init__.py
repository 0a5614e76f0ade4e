from spendwise.presentation.api.routers.records import router as records_router
from spendwise.presentation.api.routers.trash import router as trash_router

__all__ = [
    "records_router",
    "trash_router",
]
