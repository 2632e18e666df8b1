"""
Violation path parsing for formtree.

This package interprets the paths reported by the validation engine, which
address child fields and field data in a single string.
"""

from formtree.parsing.violation_path import ViolationPath, ViolationPathElement

__all__ = [
    "ViolationPath",
    "ViolationPathElement",
]
