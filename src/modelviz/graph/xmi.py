"""XMI renderer placeholder.

XMI interchange output is not supported. The renderer exists so the format
can be selected and refused in one place.
"""

import logging

from .framework import GraphRenderer
from .models import DiagramGraph

logger = logging.getLogger(__name__)


class XmiRenderer(GraphRenderer):
    """Always reports XMI as unsupported and produces no document."""

    supported = False

    @property
    def format_name(self) -> str:
        return "xmi"

    def get_file_extension(self) -> str:
        return ".xmi"

    def render(self, graph: DiagramGraph) -> str:
        logger.warning(self.unsupported_message())
        return ""
