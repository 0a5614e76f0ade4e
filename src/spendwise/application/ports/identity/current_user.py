"""CurrentUser - the application's view of the authenticated user.

Authentication happens outside this service; the presentation layer turns
whatever identity it receives into this type.
"""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class CurrentUser:
    """Immutable representation of the current user.

    Repositories and stores use ``user_id`` to scope everything they read
    and write to this user.
    """

    user_id: UUID

    def __str__(self) -> str:
        return f"CurrentUser({self.user_id})"
