"""
Core formtree components.

This package provides the fundamental building blocks: property paths, the
field tree node and shared type definitions.
"""

from formtree.core.field_node import (
    FieldChain,
    FieldNode,
    iter_mapped_children,
    iter_virtual_layers,
)
from formtree.core.path_utils import (
    ElementKind,
    PathElement,
    PropertyPath,
    PropertyPathBuilder,
    parse_property_path,
    render_elements,
)
from formtree.core.types import ErrorMapping

__all__ = [
    "FieldNode",
    "FieldChain",
    "iter_mapped_children",
    "iter_virtual_layers",
    "ElementKind",
    "PathElement",
    "PropertyPath",
    "PropertyPathBuilder",
    "parse_property_path",
    "render_elements",
    "ErrorMapping",
]
