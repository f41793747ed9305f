"""Association classification: which kind of edge a relationship becomes."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum

from ..inflector import pluralize_name, underscore_name
from .models import EdgeKind, EdgeSpec

logger = logging.getLogger(__name__)


class AssociationMacro(str, Enum):
    """Association macros understood by the classifier."""
    BELONGS_TO = "belongs_to"
    HAS_ONE = "has_one"
    HAS_MANY = "has_many"
    HAS_AND_BELONGS_TO_MANY = "has_and_belongs_to_many"


@dataclass
class AssociationDescriptor:
    """A relationship as declared on its owning class."""
    macro: AssociationMacro
    owner: str
    target: str
    name: str
    through: bool = False

    def __post_init__(self):
        self.macro = AssociationMacro(self.macro)
        self.target = self.target.lstrip(":")


@dataclass
class ClassificationSession:
    """Many-to-many relations already drawn during one generation run.

    Create one per run; the mirror side of a symmetric relation is
    suppressed only within the session that saw the first side.
    """
    seen: set[tuple[str, str, str]] = field(default_factory=set)

    def claim(self, owner: str, target: str, name: str) -> bool:
        """Record a many-to-many relation; False if it was already drawn."""
        if (owner, target, name) in self.seen:
            return False
        if owner != target and any(o == target and t == owner for o, t, _ in self.seen):
            return False
        self.seen.add((owner, target, name))
        return True

    def reset(self) -> None:
        self.seen.clear()


class EdgeClassifier:
    """Maps association descriptors to edge kinds.

    Rules, first match wins:
    1. belongs_to whose target has_many the owner back -> invisible
    2. has_one / belongs_to -> one-one
    3. has_many without a join -> one-many
    4. has_many through / habtm -> many-many, once per relation pair
    """

    def __init__(
        self,
        session: ClassificationSession | None = None,
        has_many_lookup: Callable[[str], Iterable[str]] | None = None,
    ):
        self.session = session or ClassificationSession()
        self.has_many_lookup = has_many_lookup or (lambda class_name: ())

    def classify(self, descriptor: AssociationDescriptor) -> EdgeKind | None:
        """Classify a descriptor; None means no edge is drawn."""
        macro = descriptor.macro

        if macro == AssociationMacro.BELONGS_TO and self._has_reverse_has_many(descriptor):
            return EdgeKind.INVISIBLE
        if macro in (AssociationMacro.HAS_ONE, AssociationMacro.BELONGS_TO):
            return EdgeKind.ONE_ONE
        if macro == AssociationMacro.HAS_MANY and not descriptor.through:
            return EdgeKind.ONE_MANY
        if macro in (AssociationMacro.HAS_MANY, AssociationMacro.HAS_AND_BELONGS_TO_MANY):
            if self.session.claim(descriptor.owner, descriptor.target, descriptor.name):
                return EdgeKind.MANY_MANY
            logger.debug(
                f"Skipping mirror of many-to-many {descriptor.owner} <-> {descriptor.target}"
            )
        return None

    def build_edge(self, descriptor: AssociationDescriptor, label: str | None = None) -> EdgeSpec | None:
        """Classify a descriptor and build the edge for it."""
        kind = self.classify(descriptor)
        if kind is None:
            return None
        return EdgeSpec(kind=kind, source=descriptor.owner, target=descriptor.target, label=label)

    def _has_reverse_has_many(self, descriptor: AssociationDescriptor) -> bool:
        back_name = pluralize_name(underscore_name(descriptor.owner))
        return any(name == back_name for name in self.has_many_lookup(descriptor.target))
