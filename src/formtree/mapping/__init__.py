"""
Violation mapping for formtree.

This package contains the error mapping rules and the mapper that walks the
field tree to find the field receiving a violation's error.
"""

from formtree.mapping.mapper import ViolationMapper, map_violation
from formtree.mapping.rules import MappingRule

__all__ = [
    "MappingRule",
    "ViolationMapper",
    "map_violation",
]
