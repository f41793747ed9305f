"""Configuration management for modelviz using Pydantic models."""

import json
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

CONFIG_FILE_NAME = ".modelviz.json"

DEFAULT_PALETTE = [
    "#e8f1fb",
    "#fdf2e3",
    "#eaf7ea",
    "#f7e9f3",
    "#fcf8dc",
    "#e6f4f4",
    "#f1ecfa",
    "#fbe9e7",
]


class OutputFormat(str, Enum):
    """Output format types."""
    DOT = "dot"
    XMI = "xmi"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class DiagramOptions(BaseModel):
    """What goes into the diagram."""
    brief: bool = False
    hide_types: bool = Field(alias="hideTypes", default=False)
    hide_magic: bool = Field(alias="hideMagic", default=False)
    only_content_columns: bool = Field(alias="onlyContentColumns", default=False)
    hide_belongs_to: bool = Field(alias="hideBelongsTo", default=False)
    inheritance: bool = False
    transitive: bool = False
    all_classes: bool = Field(alias="all", default=False)
    modules: bool = False
    show_label: bool = Field(alias="label", default=False)
    filter: list[str] = Field(default_factory=list)
    root_classes: list[str] = Field(alias="rootClasses", default_factory=lambda: [
        "ActiveRecord::Base",
        "Object",
    ])

    model_config = ConfigDict(populate_by_name=True)


class LinkConfig(BaseModel):
    """Clickable source links on model nodes."""
    base: str | None = None
    layouts: list[str] = Field(default_factory=lambda: [
        "app/models/{path}.rb",
        "{path}.rb",
        "{path}.py",
    ])

    @field_validator("layouts")
    @classmethod
    def validate_layouts(cls, v):
        missing = [layout for layout in v if "{path}" not in layout]
        if missing:
            raise ValueError(f"link layouts must contain a '{{path}}' placeholder, got: {missing}")
        return v


class StyleConfig(BaseModel):
    """Visual styling hints passed to the renderer."""
    color_clusters: bool = Field(alias="colorClusters", default=False)
    palette: list[str] = Field(default_factory=lambda: list(DEFAULT_PALETTE))
    seed: int | None = None
    edge_lengths: bool = Field(alias="edgeLengths", default=False)

    @field_validator("palette")
    @classmethod
    def validate_palette(cls, v):
        if not v:
            raise ValueError("palette must contain at least one color")
        return v

    model_config = ConfigDict(populate_by_name=True)


class OutputConfig(BaseModel):
    """Output configuration section."""
    format: OutputFormat = OutputFormat.DOT
    file: str | None = None

    model_config = ConfigDict(use_enum_values=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN

    model_config = ConfigDict(use_enum_values=True)


class ModelvizConfig(BaseModel):
    """Complete modelviz configuration model."""
    diagram: DiagramOptions = Field(default_factory=DiagramOptions)
    links: LinkConfig = Field(default_factory=LinkConfig)
    style: StyleConfig = Field(default_factory=StyleConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> ModelvizConfig:
    """Load `.modelviz.json` (given, or found upward from the cwd); defaults when absent.

    Raises:
        ValueError: If the file is not JSON or not a valid configuration
    """
    path = find_config_file() if config_path is None else Path(config_path)
    if path is None or not path.exists():
        return create_default_config()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {path}: {e}")
    try:
        return ModelvizConfig(**data)
    except (TypeError, ValidationError) as e:
        raise ValueError(f"Failed to load config from {path}: {e}")


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Nearest `.modelviz.json` in ``start_dir`` or one of its parents."""
    start = Path(start_dir or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILE_NAME
        if candidate.exists():
            return candidate
    return None


def create_default_config() -> ModelvizConfig:
    return ModelvizConfig()
