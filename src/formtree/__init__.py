"""
formtree - map validation violations onto the fields of a form tree

formtree decides which field of a hierarchical form receives the error for a
violation reported against a path into the form's data.
"""

from importlib.metadata import version

from formtree.core.field_node import FieldNode
from formtree.core.path_utils import PropertyPath
from formtree.mapping.mapper import ViolationMapper, map_violation
from formtree.models import FormError, Violation

__version__ = version("formtree")

__all__ = [
    "__version__",
    "FieldNode",
    "PropertyPath",
    "ViolationMapper",
    "map_violation",
    "Violation",
    "FormError",
]
