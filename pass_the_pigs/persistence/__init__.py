"""
Pass the Pigs Persistence Layer.

Versioned snapshot schema, migration of older shapes, and a JSON file store.
"""

from pass_the_pigs.persistence.migrations import migrate
from pass_the_pigs.persistence.models import CURRENT_SCHEMA_VERSION, SnapshotModel
from pass_the_pigs.persistence.serializer import (
    dump_snapshot,
    dumps,
    load_snapshot,
    loads,
)
from pass_the_pigs.persistence.store import SnapshotStore

__all__ = [
    "CURRENT_SCHEMA_VERSION",
    "SnapshotModel",
    "SnapshotStore",
    "dump_snapshot",
    "dumps",
    "load_snapshot",
    "loads",
    "migrate",
]
