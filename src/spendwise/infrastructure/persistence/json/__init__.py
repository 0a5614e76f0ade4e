"""JSON file persistence for the tombstone partitions."""

from spendwise.infrastructure.persistence.json.tombstone_partition_repository import (  # NOQA: E501
    JsonFileTombstonePartitionRepository,
)

__all__ = ["JsonFileTombstonePartitionRepository"]
