"""Graphviz DOT renderer for model diagrams.

Templates follow http://www.graphviz.org/doc/info/attrs.html. Every
identifier is double-quoted; record labels escape the characters that
carry meaning inside a record (``{ } | < >``).
"""

import logging
from collections.abc import Callable
from datetime import datetime

from .. import __version__
from ..inflector import underscore_name
from .framework import GraphRenderer
from .models import (
    MODEL_DOMAIN_KINDS,
    ControllerMethods,
    DiagramGraph,
    EdgeKind,
    EdgeSpec,
    NodeKind,
    NodeSpec,
    state_node_id,
)
from .palette import ColorPalette

logger = logging.getLogger(__name__)

LEFT = "\\l"

EDGE_STYLES = {
    EdgeKind.ONE_ONE: "arrowtail=odot, arrowhead=odot, dir=both, concentrate=true",
    EdgeKind.ONE_MANY: "arrowtail=odot, arrowhead=crow, dir=both, concentrate=true",
    EdgeKind.MANY_MANY: "arrowtail=crow, arrowhead=crow, dir=both, concentrate=true",
    EdgeKind.IS_A: 'label="", dir="none"',
    EdgeKind.IS_A_CHILD: 'label="", dir="back", arrowtail=empty',
    EdgeKind.INVISIBLE: "style=invis",
    EdgeKind.EVENT: "fontsize=10",
}

# Kinds whose association name is shown on the edge
LABELLED_KINDS = frozenset({EdgeKind.ONE_ONE, EdgeKind.ONE_MANY, EdgeKind.MANY_MANY, EdgeKind.EVENT})

BASE_EDGE_LENGTH = 10


def quote(name: str) -> str:
    """Quote a DOT identifier."""
    escaped = str(name).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def escape_label(text: str) -> str:
    """Escape free text placed inside a quoted label."""
    return str(text).replace("\\", "\\\\").replace('"', '\\"')


def escape_record(text: str) -> str:
    """Escape text placed inside a record label field."""
    out = []
    for ch in str(text):
        if ch in '\\{}|<>"':
            out.append("\\" + ch)
        elif ch == "\n":
            out.append(LEFT)
        else:
            out.append(ch)
    return "".join(out)


def edge_length(kind: EdgeKind, source: str, target: str) -> int:
    """Suggested edge length between two models; shorter pulls them together."""
    if kind in (EdgeKind.IS_A, EdgeKind.IS_A_CHILD):
        return BASE_EDGE_LENGTH - 9
    if source.startswith(target) or target.startswith(source):
        return BASE_EDGE_LENGTH - 6
    if source in target or target in source:
        return BASE_EDGE_LENGTH - 3
    return BASE_EDGE_LENGTH


class DotRenderer(GraphRenderer):
    """Renders a DiagramGraph as a Graphviz digraph."""

    def __init__(
        self,
        hide_types: bool = False,
        palette: ColorPalette | None = None,
        edge_lengths: bool = False,
        version_line: str | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.hide_types = hide_types
        self.palette = palette
        self.edge_lengths = edge_lengths
        self.version_line = version_line
        self.clock = clock
        self._kinds: dict[str, NodeKind] = {}

    @property
    def format_name(self) -> str:
        return "dot"

    def get_file_extension(self) -> str:
        return ".dot"

    def render(self, graph: DiagramGraph) -> str:
        """Render the graph: header, nodes, clusters, edges, footer."""
        self._kinds = {node.name: node.kind for node in graph.nodes}
        for members in graph.clusters.values():
            self._kinds.update({node.name: node.kind for node in members})
        if self.palette is not None:
            self.palette.reset()

        parts = [self._header(graph)]
        parts.extend(self.render_node(node) for node in graph.nodes)
        parts.extend(self._cluster(key, members) for key, members in graph.clusters.items())
        parts.extend(self.render_edge(edge) for edge in graph.edges)
        parts.append(self._footer())

        logger.debug(
            f"Rendered {len(graph.nodes)} nodes, {len(graph.clusters)} clusters, {len(graph.edges)} edges"
        )
        return "".join(parts)

    def label_lines(self, graph: DiagramGraph) -> list[str]:
        """Title block lines of the diagram."""
        if graph.label is not None:
            return graph.label
        lines = [
            f"{graph.diagram_type} diagram",
            f"Date: {self.clock().strftime('%b %d %Y - %H:%M')}",
        ]
        if self.version_line:
            lines.append(self.version_line)
        lines.append(f"Generated by modelviz {__version__}")
        return lines

    def render_node(self, node: NodeSpec, indent: str = "\t") -> str:
        """Render one node statement."""
        name = node.name
        kind = node.kind

        if kind == NodeKind.STATE_MACHINE:
            return self._state_machine(node, indent)

        if kind == NodeKind.MODEL:
            fields = [escape_record(f.display(self.hide_types)) for f in node.attributes]
            options = f'shape=Mrecord, label="{{{escape_record(name)}|{LEFT.join(fields)}{LEFT}}}"'
            if node.color:
                options += f", style=filled, fillcolor={quote(node.color)}"
            if node.source_url:
                options += f", URL={quote(node.source_url)}"
        elif kind in (NodeKind.MODEL_BRIEF, NodeKind.CLASS_BRIEF, NodeKind.CONTROLLER_BRIEF):
            options = "shape=box"
        elif kind == NodeKind.CLASS:
            options = f'shape=record, label="{{{escape_record(name)}|}}"'
        elif kind == NodeKind.CONTROLLER:
            methods: ControllerMethods = node.attributes
            sections = [
                LEFT.join(escape_record(m) for m in group) + LEFT
                for group in (methods.public, methods.protected, methods.private)
            ]
            options = f'shape=Mrecord, label="{{{escape_record(name)}|{"|".join(sections)}}}"'
        else:
            options = f"shape=box, style=dotted, label={quote(name)}"

        return f"{indent}{quote(name)} [{options}]\n"

    def render_edge(self, edge: EdgeSpec, indent: str = "\t") -> str:
        """Render one edge statement."""
        options = ""
        if edge.label and edge.kind in LABELLED_KINDS:
            options = f"label={quote(edge.label)}, tooltip={quote(edge.label)}, "
        options += EDGE_STYLES[edge.kind]

        if self.edge_lengths and self._in_model_domain(edge.source, edge.target):
            options += f", len={edge_length(edge.kind, edge.source, edge.target)}"

        return f"{indent}{quote(edge.source)} -> {quote(edge.target)} [{options}]\n"

    def _in_model_domain(self, source: str, target: str) -> bool:
        return self._kinds.get(source) in MODEL_DOMAIN_KINDS and self._kinds.get(target) in MODEL_DOMAIN_KINDS

    def _state_machine(self, node: NodeSpec, indent: str) -> str:
        block = f"{indent}subgraph {quote('cluster_' + underscore_name(node.name))} {{\n"
        block += f"{indent}\tlabel={quote(node.name)}\n"
        for state in node.attributes:
            block += f"{indent}\t{quote(state_node_id(node.name, state))} [label={quote(state)}]\n"
        return block + f"{indent}}}\n"

    def _cluster(self, key: str, members: list[NodeSpec]) -> str:
        """Render an inheritance cluster.

        Direct subclasses hang off one invisible funnel point below the
        superclass; deeper descendants that were merged in point at their
        own superclass.
        """
        block = f"\tsubgraph {quote('cluster_' + underscore_name(key))} {{\n"
        block += f"\t\tlabel={quote(key)}\n"
        if self.palette is not None:
            block += f"\t\tstyle=filled\n\t\tfillcolor={quote(self.palette.next_color())}\n"

        block += "".join(self.render_node(node, "\t\t") for node in members)

        funnel = f"{key}_funnel"
        block += f'\t\t{quote(funnel)} [label="", fixedsize="false", width=0, height=0, shape=none]\n'
        block += (
            f"\t\t{quote(key)} -> {quote(funnel)} "
            f'[label="", dir="back", arrowtail=empty, arrowsize="2", len="0.2"]\n'
        )
        for node in members:
            if node.name == key:
                continue
            if node.superclass_name in (None, key):
                edge = EdgeSpec(kind=EdgeKind.IS_A, source=funnel, target=node.name)
            else:
                edge = EdgeSpec(kind=EdgeKind.IS_A_CHILD, source=node.superclass_name, target=node.name)
            block += self.render_edge(edge, "\t\t")

        return block + "\t}\n"

    def _header(self, graph: DiagramGraph) -> str:
        header = f"digraph {quote(graph.diagram_type.lower() + '_diagram')} {{\n"
        header += "\tgraph[overlap=false, splines=ortho]\n"
        if graph.show_label:
            lines = self.label_lines(graph)
            if lines:
                text = "".join(escape_label(line) + LEFT for line in lines)
                header += f'\tlabelloc="t";\n\tlabel="{text}"\n'
        return header

    def _footer(self) -> str:
        return "}\n"
