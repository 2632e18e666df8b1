"""
formtree exception classes.

This package provides all exception types used throughout formtree for
consistent error handling and reporting.
"""

from formtree.exceptions.core import (
    AmbiguousFieldPathError,
    DuplicateChildError,
    ErrorMappingError,
    FieldNameError,
    FormTreeError,
    InvalidPathFormatError,
)

__all__ = [
    "FormTreeError",
    "InvalidPathFormatError",
    "ErrorMappingError",
    "DuplicateChildError",
    "AmbiguousFieldPathError",
    "FieldNameError",
]
