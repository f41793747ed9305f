"""Graph data models: nodes, edges and inheritance clusters."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from ..errors import ClusterPlacementError, DuplicateNodeError, EdgeKindError, NodeShapeError

if TYPE_CHECKING:
    from .framework import GraphRenderer

logger = logging.getLogger(__name__)


class NodeKind(str, Enum):
    """Kinds of diagram nodes."""
    MODEL = "model"
    MODEL_BRIEF = "model-brief"
    CLASS = "class"
    CLASS_BRIEF = "class-brief"
    CONTROLLER = "controller"
    CONTROLLER_BRIEF = "controller-brief"
    MODULE = "module"
    STATE_MACHINE = "state-machine"


class EdgeKind(str, Enum):
    """Kinds of diagram edges."""
    ONE_ONE = "one-one"
    ONE_MANY = "one-many"
    MANY_MANY = "many-many"
    IS_A = "is-a"
    IS_A_CHILD = "is-a-child"
    INVISIBLE = "invisible"
    EVENT = "event"


MODEL_DOMAIN_KINDS = frozenset({NodeKind.MODEL, NodeKind.MODEL_BRIEF})


@dataclass
class FieldSpec:
    """A model attribute line."""
    name: str
    type: str | None = None

    @classmethod
    def parse(cls, text: str) -> "FieldSpec":
        """Parse a preformatted ``"name :type"`` line."""
        name, sep, type_ = text.partition(" :")
        return cls(name=name.strip(), type=type_.strip() if sep else None)

    def display(self, hide_type: bool = False) -> str:
        if hide_type or not self.type:
            return self.name
        return f"{self.name} :{self.type}"


@dataclass
class ControllerMethods:
    """Controller method names grouped by visibility."""
    public: list[str] = field(default_factory=list)
    protected: list[str] = field(default_factory=list)
    private: list[str] = field(default_factory=list)


@dataclass
class NodeSpec:
    """A class in the diagram.

    The shape of ``attributes`` depends on ``kind``: a list of FieldSpec for
    models, ControllerMethods for controllers, a list of state names for
    state machines and None for everything else.
    """
    kind: NodeKind
    name: str
    attributes: list[FieldSpec] | ControllerMethods | list[str] | None = None
    superclass_name: str | None = None
    color: str | None = None
    source_url: str | None = None

    def __post_init__(self):
        try:
            self.kind = NodeKind(self.kind)
        except ValueError:
            raise NodeShapeError(f"Unknown node kind {self.kind!r} for '{self.name}'")

        if self.kind == NodeKind.MODEL:
            items = self.attributes or []
            if not isinstance(items, list):
                raise NodeShapeError(f"Model '{self.name}' needs a list of fields")
            self.attributes = [FieldSpec.parse(a) if isinstance(a, str) else a for a in items]
        elif self.kind == NodeKind.CONTROLLER:
            if self.attributes is None:
                self.attributes = ControllerMethods()
            elif not isinstance(self.attributes, ControllerMethods):
                raise NodeShapeError(f"Controller '{self.name}' needs ControllerMethods")
        elif self.kind == NodeKind.STATE_MACHINE:
            states = self.attributes or []
            if not isinstance(states, list) or not all(isinstance(s, str) for s in states):
                raise NodeShapeError(f"State machine '{self.name}' needs a list of state names")
            self.attributes = list(states)
        elif self.attributes:
            raise NodeShapeError(f"{self.kind.value} node '{self.name}' takes no attributes")
        else:
            self.attributes = None


@dataclass(frozen=True)
class EdgeSpec:
    """A relationship between two classes. Immutable once built."""
    kind: EdgeKind
    source: str
    target: str
    label: str | None = None

    def __post_init__(self):
        try:
            object.__setattr__(self, "kind", EdgeKind(self.kind))
        except ValueError:
            raise EdgeKindError(self.kind)


class DiagramGraph:
    """Nodes, edges and inheritance clusters of one diagram.

    Nodes start in the top-level list. ``add_cluster`` moves a node into the
    cluster of its superclass lineage; once there a node never moves again,
    except when its own subclass cluster is absorbed along with it.
    """

    def __init__(self, diagram_type: str = "Models", show_label: bool = False):
        self.diagram_type = diagram_type
        self.show_label = show_label
        self.label: list[str] | None = None
        self.nodes: list[NodeSpec] = []
        self.edges: list[EdgeSpec] = []
        self.clusters: dict[str, list[NodeSpec]] = {}
        # Cluster heads still waiting for their own add_cluster call
        self._unplaced_heads: set[str] = set()

    def add_node(self, node: NodeSpec) -> None:
        """Add a node to the top level.

        A node whose name already keys a cluster (its subclasses were seen
        first) goes straight to the head of that cluster.

        Raises:
            DuplicateNodeError: If a node with the same name exists
        """
        if self.find_node(node.name) is not None:
            raise DuplicateNodeError(node.name)

        if node.name in self.clusters:
            logger.debug(f"Promoting {node.name} to head of its cluster")
            self.clusters[node.name].insert(0, node)
            self._unplaced_heads.add(node.name)
        else:
            self.nodes.append(node)

    def add_edge(self, edge: EdgeSpec) -> None:
        """Add an edge to the graph."""
        self.edges.append(edge)

    def add_cluster(self, superclass_name: str, node: NodeSpec) -> None:
        """Move ``node`` into the cluster of ``superclass_name``.

        The destination is the cluster that already holds the superclass as
        a member, else the cluster keyed by the superclass, else a new one.
        A top-level superclass node is pulled in as member 0.

        Raises:
            ClusterPlacementError: If the node is not waiting to be placed
        """
        self._detach(node)
        node.superclass_name = superclass_name

        key = self._cluster_holding(superclass_name)
        if key is None:
            key = superclass_name
            self.clusters.setdefault(key, [])
        self.clusters[key].append(node)

        # Subclasses of node seen earlier join the same lineage
        if node.name in self.clusters and node.name != key:
            absorbed = self.clusters.pop(node.name)
            logger.debug(f"Merging cluster {node.name} into {key}")
            self.clusters[key].extend(absorbed)

        for i, candidate in enumerate(self.nodes):
            if candidate.name == superclass_name:
                self.clusters[key].insert(0, self.nodes.pop(i))
                self._unplaced_heads.add(superclass_name)
                break

    def find_node(self, name: str) -> NodeSpec | None:
        """Find a node by name, top level or clustered."""
        for node in self.nodes:
            if node.name == name:
                return node
        for members in self.clusters.values():
            for node in members:
                if node.name == name:
                    return node
        return None

    def cluster_of(self, name: str) -> str | None:
        """Key of the cluster a node belongs to, if any."""
        return self._cluster_holding(name)

    def serialize(self, renderer: "GraphRenderer | None" = None) -> str:
        """Render the current state; DOT unless another renderer is given."""
        if renderer is None:
            from .dot import DotRenderer
            renderer = DotRenderer()
        return renderer.render(self)

    def to_dot(self) -> str:
        return self.serialize()

    def to_xmi(self) -> str:
        from .xmi import XmiRenderer
        return self.serialize(XmiRenderer())

    def _cluster_holding(self, name: str) -> str | None:
        for key, members in self.clusters.items():
            if any(member.name == name for member in members):
                return key
        return None

    def _detach(self, node: NodeSpec) -> None:
        """Take a node out of the top level, or off the head of its own cluster."""
        for i, candidate in enumerate(self.nodes):
            if candidate.name == node.name:
                del self.nodes[i]
                return

        members = self.clusters.get(node.name)
        if node.name in self._unplaced_heads and members and members[0].name == node.name:
            self._unplaced_heads.discard(node.name)
            del members[0]
            return

        raise ClusterPlacementError(f"Node '{node.name}' is not an unplaced node of this graph")


def state_node_id(machine: str, state: str) -> str:
    """Node identifier of a state inside its state machine subgraph."""
    return f"{machine}:{state}"
