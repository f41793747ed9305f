"""Diagram generation framework: renderer registry and generation entry point."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime

from ..config import ModelvizConfig
from ..models.snapshot import Snapshot
from .models import DiagramGraph
from .models_diagram import ModelsDiagram

logger = logging.getLogger(__name__)


class GraphRenderer(ABC):
    """Abstract base class for graph renderers."""

    supported = True

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Name of the output format."""
        pass

    @abstractmethod
    def render(self, graph: DiagramGraph) -> str:
        """Render a diagram graph to a document."""
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get file extension for this format."""
        pass

    def unsupported_message(self) -> str:
        return f"{self.format_name.upper()} output is not supported"


class DiagramGenerator:
    """Builds diagram graphs from snapshots and renders them."""

    def __init__(self, config: ModelvizConfig, clock: Callable[[], datetime] = datetime.now):
        self.config = config
        self.clock = clock
        self.renderers: dict[str, GraphRenderer] = {}

    def add_renderer(self, renderer: GraphRenderer) -> None:
        """Add a graph renderer."""
        self.renderers[renderer.format_name] = renderer

    def add_default_renderers(self, snapshot: Snapshot | None = None) -> None:
        """Register the DOT and XMI renderers configured from ``self.config``."""
        from .dot import DotRenderer
        from .palette import ColorPalette
        from .xmi import XmiRenderer

        style = self.config.style
        palette = ColorPalette(style.palette, style.seed) if style.color_clusters else None
        version_line = None
        if snapshot is not None and snapshot.schema_version:
            version_line = f"Schema version: {snapshot.schema_version}"

        self.add_renderer(DotRenderer(
            hide_types=self.config.diagram.hide_types,
            palette=palette,
            edge_lengths=style.edge_lengths,
            version_line=version_line,
            clock=self.clock,
        ))
        self.add_renderer(XmiRenderer())

    def generate_from_snapshot(self, snapshot: Snapshot) -> DiagramGraph:
        """Walk a snapshot and build its models diagram.

        Args:
            snapshot: Classes discovered in the application

        Returns:
            DiagramGraph ready for rendering
        """
        logger.info(f"Generating models diagram from {len(snapshot.classes)} classes")
        diagram = ModelsDiagram(self.config, snapshot)
        graph = diagram.generate()
        logger.info(
            f"Generated graph with {len(graph.nodes)} top-level nodes, "
            f"{len(graph.clusters)} clusters and {len(graph.edges)} edges"
        )
        return graph

    def get_renderer(self, format_name: str) -> GraphRenderer:
        """Renderer registered for ``format_name``.

        Raises:
            ValueError: If no renderer handles the format
        """
        if format_name not in self.renderers:
            available = list(self.renderers.keys())
            raise ValueError(f"Unknown format '{format_name}'. Available: {available}")
        return self.renderers[format_name]

    def render_graph(self, graph: DiagramGraph, format_name: str = "dot") -> str:
        """Render a graph with the renderer registered for ``format_name``."""
        renderer = self.get_renderer(format_name)
        logger.info(f"Rendering graph with {renderer.format_name} renderer")
        return renderer.render(graph)
