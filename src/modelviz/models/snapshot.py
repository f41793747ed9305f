"""Metadata snapshot models: the classes a diagram is built from.

A snapshot is produced by whatever walks the application (a Rails runner
script, an ORM introspection hook, ...) and saved as JSON. modelviz only
consumes it; every class carries a pre-resolved ``kind``.
"""

import json
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from modelviz.errors import SnapshotError


class ClassKind(str, Enum):
    """What a discovered class is."""
    MODEL = "model"
    CLASS = "class"
    MODULE = "module"
    CONTROLLER = "controller"
    STATE_MACHINE = "state_machine"


class AssociationMacroName(str, Enum):
    """Association macros a snapshot may declare."""
    BELONGS_TO = "belongs_to"
    HAS_ONE = "has_one"
    HAS_MANY = "has_many"
    HAS_AND_BELONGS_TO_MANY = "has_and_belongs_to_many"


class ColumnInfo(BaseModel):
    """A database column of a model."""
    name: str
    type: str = Field(description="Column type as reported by the ORM")
    content: bool = Field(default=True, description="False for keys, timestamps and other bookkeeping columns")


class AssociationInfo(BaseModel):
    """A declared association between two classes."""
    name: str
    macro: AssociationMacroName
    class_name: str = Field(alias="className")
    through: str | None = None

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    def same_declaration(self, other: "AssociationInfo") -> bool:
        return (self.name, self.macro, self.class_name) == (other.name, other.macro, other.class_name)


class ControllerMethodsInfo(BaseModel):
    """Controller action names grouped by visibility."""
    public: list[str] = Field(default_factory=list)
    protected: list[str] = Field(default_factory=list)
    private: list[str] = Field(default_factory=list)


class StateEvent(BaseModel):
    """A transition of a state machine."""
    name: str
    from_state: str = Field(alias="from")
    to_state: str = Field(alias="to")

    model_config = ConfigDict(populate_by_name=True)


class ClassInfo(BaseModel):
    """One discovered class."""
    name: str
    kind: ClassKind = ClassKind.MODEL
    superclass: str | None = None
    abstract: bool = False
    table_name: str | None = Field(alias="tableName", default=None)
    columns: list[ColumnInfo] = Field(default_factory=list)
    associations: list[AssociationInfo] = Field(default_factory=list)
    methods: ControllerMethodsInfo = Field(default_factory=ControllerMethodsInfo)
    states: list[str] = Field(default_factory=list)
    events: list[StateEvent] = Field(default_factory=list)
    source_file: str | None = Field(alias="sourceFile", default=None)
    color: str | None = None

    model_config = ConfigDict(populate_by_name=True)

    @property
    def content_columns(self) -> list[ColumnInfo]:
        return [c for c in self.columns if c.content]


class Snapshot(BaseModel):
    """All classes of one application."""
    app_name: str | None = Field(alias="appName", default=None)
    schema_version: str | None = Field(alias="schemaVersion", default=None)
    classes: list[ClassInfo] = Field(default_factory=list)
    source_files: list[str] = Field(alias="sourceFiles", default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    def get(self, name: str) -> ClassInfo | None:
        """Look up a class by name, ignoring a leading ``::``."""
        name = name.lstrip(":")
        for info in self.classes:
            if info.name == name:
                return info
        return None

    def has_many_names(self, name: str) -> list[str]:
        """Names of the ``has_many`` associations a class declares."""
        info = self.get(name)
        if info is None:
            return []
        return [a.name for a in info.associations if a.macro == AssociationMacroName.HAS_MANY.value]

    def ancestors(self, name: str) -> list[str]:
        """Superclass chain of a class, nearest first."""
        chain = []
        info = self.get(name)
        while info is not None and info.superclass and info.superclass not in chain:
            chain.append(info.superclass)
            info = self.get(info.superclass)
        return chain


def load_snapshot(path: str | Path) -> Snapshot:
    """Load a metadata snapshot from a JSON file.

    Raises:
        SnapshotError: If the file is missing, not JSON, or not a snapshot
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise SnapshotError(f"Snapshot file not found: {path}")
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Invalid JSON in snapshot {path}: {e}")

    try:
        return Snapshot(**data)
    except (TypeError, ValidationError) as e:
        raise SnapshotError(f"Invalid snapshot {path}: {e}")
