"""Models diagram: walks a snapshot and feeds the diagram graph."""

import logging
import re

from ..config import ModelvizConfig
from ..inflector import default_association_name
from ..models.snapshot import AssociationInfo, ClassInfo, ClassKind, Snapshot
from .classifier import AssociationDescriptor, ClassificationSession, EdgeClassifier
from .links import resolve_source_url
from .models import (
    ControllerMethods,
    DiagramGraph,
    EdgeKind,
    EdgeSpec,
    FieldSpec,
    NodeKind,
    NodeSpec,
    state_node_id,
)

logger = logging.getLogger(__name__)

# Columns maintained by the framework rather than by the application
MAGIC_FIELDS = [
    "created_at", "created_on", "updated_at", "updated_on",
    "lock_version", "type", "id", "position", "parent_id", "lft",
    "rgt", "quote", "template",
]

CLASS_NAME_PATTERN = re.compile(r"^[A-Z][\w\d]+$")


class ModelsDiagram:
    """Builds a DiagramGraph from the classes of a snapshot.

    One instance is one generation run: the many-to-many bookkeeping lives
    in a ClassificationSession created for it.
    """

    def __init__(self, config: ModelvizConfig, snapshot: Snapshot):
        self.config = config
        self.options = config.diagram
        self.snapshot = snapshot
        self.graph = DiagramGraph(diagram_type="Models", show_label=self.options.show_label)
        self.session = ClassificationSession()
        self.classifier = EdgeClassifier(self.session, snapshot.has_many_names)
        self.filter_class_names: set[str] | None = None
        self.filter_association_names: set[str] | None = None

    def generate(self) -> DiagramGraph:
        """Process every class of the snapshot; failing classes are skipped."""
        self.generate_filter_sets()
        logger.debug("Generating models diagram")

        for info in self.snapshot.classes:
            if self.filter_class_names is not None and info.name not in self.filter_class_names:
                continue
            try:
                self.process_class(info)
            except Exception as e:
                logger.warning(f"Skipping class {info.name}: {e}")

        return self.graph

    def process_class(self, info: ClassInfo) -> NodeSpec | None:
        """Add one class, its associations and its cluster placement."""
        logger.debug(f"Processing {info.name}")
        edges: list[EdgeSpec] = []
        clustered = False

        if info.kind == ClassKind.MODEL:
            node = self._model_node(info)
            edges = self._association_edges(info)
            clustered = self._in_inheritance_cluster(info)
        elif info.kind == ClassKind.CLASS:
            if not self.options.all_classes:
                return None
            kind = NodeKind.CLASS_BRIEF if self.options.brief else NodeKind.CLASS
            node = NodeSpec(kind=kind, name=info.name)
        elif info.kind == ClassKind.MODULE:
            if not self.options.modules:
                return None
            node = NodeSpec(kind=NodeKind.MODULE, name=info.name)
        elif info.kind == ClassKind.CONTROLLER:
            if self.options.brief:
                node = NodeSpec(kind=NodeKind.CONTROLLER_BRIEF, name=info.name)
            else:
                methods = ControllerMethods(
                    public=list(info.methods.public),
                    protected=list(info.methods.protected),
                    private=list(info.methods.private),
                )
                node = NodeSpec(kind=NodeKind.CONTROLLER, name=info.name, attributes=methods)
        else:
            node = NodeSpec(kind=NodeKind.STATE_MACHINE, name=info.name, attributes=list(info.states))
            edges = [
                EdgeSpec(
                    kind=EdgeKind.EVENT,
                    source=state_node_id(info.name, event.from_state),
                    target=state_node_id(info.name, event.to_state),
                    label=event.name,
                )
                for event in info.events
            ]

        self.graph.add_node(node)
        for edge in edges:
            self.graph.add_edge(edge)
        if clustered:
            self.graph.add_cluster(info.superclass, node)
        return node

    def _model_node(self, info: ClassInfo) -> NodeSpec:
        if self.options.brief or info.abstract:
            return NodeSpec(kind=NodeKind.MODEL_BRIEF, name=info.name)

        columns = info.content_columns if self.options.only_content_columns else list(info.columns)
        if self.options.hide_magic:
            magic = list(MAGIC_FIELDS)
            if info.table_name:
                magic.append(f"{info.table_name}_count")
            columns = [c for c in columns if c.name not in magic]

        fields = [FieldSpec(name=c.name, type=c.type) for c in columns]
        source_url = resolve_source_url(
            info.name,
            self.config.links.base,
            self.snapshot.source_files,
            self.config.links.layouts,
            info.source_file,
        )
        return NodeSpec(
            kind=NodeKind.MODEL,
            name=info.name,
            attributes=fields,
            color=info.color,
            source_url=source_url,
        )

    def _association_edges(self, info: ClassInfo) -> list[EdgeSpec]:
        associations = list(info.associations)
        if self.filter_association_names is not None:
            associations = [a for a in associations if a.name in self.filter_association_names]
        if self.options.inheritance and not self.options.transitive and info.superclass:
            parent = self.snapshot.get(info.superclass)
            if parent is not None:
                associations = [
                    a for a in associations
                    if not any(a.same_declaration(p) for p in parent.associations)
                ]

        edges = []
        for association in associations:
            edge = self.process_association(info, association)
            if edge is not None:
                edges.append(edge)
        return edges

    def process_association(self, info: ClassInfo, association: AssociationInfo) -> EdgeSpec | None:
        """Classify one association; None when it is hidden or suppressed."""
        logger.debug(f"Processing model association {association.name}")

        if association.macro == "belongs_to" and self.options.hide_belongs_to:
            logger.debug(f"Skipping model association {association.name}")
            return None

        descriptor = AssociationDescriptor(
            macro=association.macro,
            owner=info.name,
            target=association.class_name,
            name=association.name,
            through=bool(association.through),
        )
        # Only non standard association names need a label
        label = None
        if association.name != default_association_name(association.macro, association.class_name):
            label = association.name
        return self.classifier.build_edge(descriptor, label=label)

    def _in_inheritance_cluster(self, info: ClassInfo) -> bool:
        if not self.options.inheritance or not info.superclass:
            return False
        if info.superclass in self.options.root_classes:
            return False
        if self.filter_class_names is not None:
            return info.superclass in self.filter_class_names
        return True

    def generate_filter_sets(self) -> None:
        """Resolve the configured filter patterns to class and association names."""
        patterns = [p.strip() for p in self.options.filter if p.strip()]
        if not patterns:
            return

        expression = re.compile(
            "^(" + "|".join(re.sub(r"(\w)\*", r"\1.*", p) for p in patterns) + ")$"
        )
        classes: set[str] = set()
        associations: set[str] = set()

        for info in self.snapshot.classes:
            if expression.match(info.name):
                classes.add(info.name)
            if info.kind != ClassKind.MODEL:
                continue
            for association in info.associations:
                if expression.match(association.name) or expression.match(association.class_name):
                    associations.add(association.name)
                    classes.add(association.class_name.lstrip(":"))

        for pattern in patterns:
            if CLASS_NAME_PATTERN.match(pattern):
                if self.snapshot.get(pattern) is not None:
                    classes.add(pattern)
                else:
                    logger.debug(f"Thought {pattern} was a class name, but couldn't find it.")

        for info in self.snapshot.classes:
            if any(ancestor in classes for ancestor in self.snapshot.ancestors(info.name)):
                classes.add(info.name)

        self.filter_class_names = classes
        self.filter_association_names = associations
        logger.debug(f"Limiting class names to: {', '.join(sorted(classes))}")
        logger.debug(f"Limiting association names to: {', '.join(sorted(associations))}")
