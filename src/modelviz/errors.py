"""Exception types raised by modelviz."""


class ModelvizError(Exception):
    """Base class for modelviz errors."""


class EdgeKindError(ModelvizError, ValueError):
    """Raised when an edge is built with a kind outside the known set."""

    def __init__(self, kind: object):
        self.kind = kind
        super().__init__(f"Unknown edge kind: {kind!r}")


class NodeShapeError(ModelvizError, ValueError):
    """Raised when node attributes do not match the node kind."""


class DuplicateNodeError(ModelvizError, ValueError):
    """Raised when a node identity is added to a graph twice."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Node '{name}' is already part of the graph")


class ClusterPlacementError(ModelvizError, LookupError):
    """Raised when a node cannot be moved into a cluster."""


class SnapshotError(ModelvizError, ValueError):
    """Raised when a metadata snapshot cannot be loaded."""
