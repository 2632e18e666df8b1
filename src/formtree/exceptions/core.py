"""
Exception classes for field tree construction and violation mapping.

This module defines specific exception types for the error conditions that
can occur while parsing property paths, building field trees and resolving
error mapping rules.
"""


class FormTreeError(Exception):
    """Base exception for all formtree errors."""

    pass


class InvalidPathFormatError(FormTreeError):
    """Raised when a property path string does not follow the path grammar."""

    def __init__(self, path: str, reason: str):
        """
        Initialize the exception.

        Params:
            path: The path string that failed to parse
            reason: Why the path is invalid
        """
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid property path '{path}': {reason}")


class ErrorMappingError(FormTreeError):
    """Raised when an error mapping rule points to a child that does not exist."""

    def __init__(self, target_path: str, child_name: str, origin_name: str):
        """
        Initialize the exception.

        Params:
            target_path: The target of the mapping rule
            child_name: The name that could not be resolved
            origin_name: Name of the field declaring the rule
        """
        self.target_path = target_path
        self.child_name = child_name
        self.origin_name = origin_name
        super().__init__(
            f"The child '{child_name}' mapped by the rule '{target_path}' "
            f"in '{origin_name}' does not exist"
        )


class DuplicateChildError(FormTreeError):
    """Raised when attempting to add a child whose name is already taken."""

    def __init__(self, parent_name: str, child_name: str):
        """
        Initialize the exception.

        Params:
            parent_name: The field receiving the child
            child_name: The conflicting child name
        """
        self.parent_name = parent_name
        self.child_name = child_name
        super().__init__(f"Field '{parent_name}' already has a child '{child_name}'")


class AmbiguousFieldPathError(FormTreeError):
    """Raised when two fields visible from one owner address overlapping data."""

    def __init__(
        self, owner_name: str, first_name: str, second_name: str, path: str
    ):
        """
        Initialize the exception.

        Params:
            owner_name: The non-virtual field both children are matched from
            first_name: Name of the field already in the tree
            second_name: Name of the field being added
            path: The property path the two fields overlap on
        """
        self.owner_name = owner_name
        self.first_name = first_name
        self.second_name = second_name
        self.path = path
        super().__init__(
            f"Fields '{first_name}' and '{second_name}' under '{owner_name}' "
            f"have overlapping property paths at '{path}'"
        )


class FieldNameError(FormTreeError):
    """Raised when a field name is not usable."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid field name '{name}': {reason}")
