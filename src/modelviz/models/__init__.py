"""Pydantic data models for metadata snapshots."""

from modelviz.models.snapshot import (
    AssociationInfo,
    ClassInfo,
    ClassKind,
    ColumnInfo,
    Snapshot,
    load_snapshot,
)

__all__ = [
    "AssociationInfo",
    "ClassInfo",
    "ClassKind",
    "ColumnInfo",
    "Snapshot",
    "load_snapshot",
]
