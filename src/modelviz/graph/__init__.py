"""Graph model, association classifier and renderers for model diagrams."""

from .classifier import AssociationDescriptor, AssociationMacro, ClassificationSession, EdgeClassifier
from .dot import DotRenderer
from .framework import DiagramGenerator, GraphRenderer
from .models import ControllerMethods, DiagramGraph, EdgeKind, EdgeSpec, FieldSpec, NodeKind, NodeSpec
from .models_diagram import ModelsDiagram
from .palette import ColorPalette
from .xmi import XmiRenderer

__all__ = [
    "AssociationDescriptor",
    "AssociationMacro",
    "ClassificationSession",
    "ColorPalette",
    "ControllerMethods",
    "DiagramGenerator",
    "DiagramGraph",
    "DotRenderer",
    "EdgeClassifier",
    "EdgeKind",
    "EdgeSpec",
    "FieldSpec",
    "GraphRenderer",
    "ModelsDiagram",
    "NodeKind",
    "NodeSpec",
    "XmiRenderer",
]
