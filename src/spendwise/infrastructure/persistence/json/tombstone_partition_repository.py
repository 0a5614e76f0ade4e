"""JSON file implementation of TombstonePartitionRepository.

Layout: ``<base_dir>/<user_id>/<kind>.json``, each file holding a JSON list
of stored entries. A write goes to a temporary file in the same directory
which then replaces the partition file, so a crash mid-write leaves the
previous content in place.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Any

from spendwise.domain.trash.exceptions import TombstoneStoreError
from spendwise.domain.trash.repositories import TombstonePartitionRepository
from spendwise.domain.trash.value_objects import EntityKind

if TYPE_CHECKING:
    from spendwise.application.ports.identity import CurrentUser

logger = logging.getLogger(__name__)


class JsonFileTombstonePartitionRepository(TombstonePartitionRepository):
    """One JSON file per (user, kind) partition.

    This repository is user-scoped - all operations apply to the current
    user passed at construction time.
    """

    def __init__(self, base_dir: Path | str, current_user: CurrentUser) -> None:
        self._user_dir = Path(base_dir) / str(current_user.user_id)

    def partition_path(self, kind: EntityKind) -> Path:
        return self._user_dir / f"{kind.value}.json"

    async def read_partition(self, kind: EntityKind) -> list[Any]:
        return await asyncio.to_thread(self._read, kind)

    async def write_partition(self, kind: EntityKind, entries: list[Any]) -> None:
        await asyncio.to_thread(self._write, kind, list(entries))

    def _read(self, kind: EntityKind) -> list[Any]:
        path = self.partition_path(kind)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            msg = f"Cannot read {kind.value} trash: {e}"
            raise TombstoneStoreError(msg, kinds=[kind]) from e

        if not text.strip():
            return []
        try:
            entries = json.loads(text)
        except json.JSONDecodeError as e:
            msg = f"{kind.value} trash file is not valid JSON: {e}"
            raise TombstoneStoreError(msg, kinds=[kind]) from e
        if not isinstance(entries, list):
            msg = f"{kind.value} trash file does not hold a list"
            raise TombstoneStoreError(msg, kinds=[kind])
        return entries

    def _write(self, kind: EntityKind, entries: list[Any]) -> None:
        path = self.partition_path(kind)
        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent,
                prefix=f".{kind.value}.",
                suffix=".tmp",
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(entries, handle, ensure_ascii=False, indent=2)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
            tmp_name = None
        except (OSError, TypeError, ValueError) as e:
            msg = f"Cannot write {kind.value} trash: {e}"
            raise TombstoneStoreError(msg, kinds=[kind]) from e
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)

        logger.debug("Wrote %d %s tombstone(s) to %s", len(entries), kind.value, path)
