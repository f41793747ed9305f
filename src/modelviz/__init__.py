"""modelviz - Graphviz diagrams of an application's data-model classes.

modelviz reads a snapshot of model classes, their columns and associations,
and renders them as a DOT document with inheritance clusters.
"""

__version__ = "0.4.0"
__author__ = "modelviz contributors"
__description__ = "Render data-model class diagrams as Graphviz DOT"

from modelviz.config import ModelvizConfig

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "ModelvizConfig",
]
