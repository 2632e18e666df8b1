"""
Field tree node for formtree.

A FieldNode is one user-editable field of a form. Fields form a tree that
mirrors, possibly loosely, the shape of the underlying data: each field
addresses a slice of its parent's data through its property path, or passes
its parent's data through unchanged when it is virtual.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Optional

from formtree.core.path_utils import PathElement, PropertyPath
from formtree.core.types import DOT_RULE, FIELD_NAME_PATTERN, ErrorMapping
from formtree.exceptions import (
    AmbiguousFieldPathError,
    DuplicateChildError,
    FieldNameError,
)
from formtree.models import FormError

FieldChain = tuple["FieldNode", ...]


@dataclass(eq=False)
class FieldNode:
    """
    Node in the field tree.

    Params:
        name: Identifier of the field within its parent
        property_path: Configured path into the parent's data, defaults to the name
        is_virtual: Whether the field passes its parent's data through to its children
        is_synchronized: False when the field's input could not be converted back
        is_mapped: False when the field is not bound to the parent's data at all
        error_mapping: Rules redirecting errors, keyed by source path relative to
            this field's data, valued by a dotted chain of descendant names
    """

    name: str
    property_path: PropertyPath | str | None = None
    is_virtual: bool = False
    is_synchronized: bool = True
    is_mapped: bool = True
    error_mapping: ErrorMapping = field(default_factory=dict)
    parent: Optional["FieldNode"] = field(default=None, repr=False)
    children: dict[str, "FieldNode"] = field(default_factory=dict, repr=False)
    errors: list[FormError] = field(default_factory=list, repr=False)

    def __post_init__(self):
        if self.name and not FIELD_NAME_PATTERN.match(self.name):
            raise FieldNameError(
                self.name,
                "must start with a letter, digit or underscore and contain only "
                "letters, digits, underscores, hyphens and colons",
            )

        if isinstance(self.property_path, str):
            self.property_path = PropertyPath(self.property_path)

        self.error_mapping = dict(self.error_mapping)
        # Fail fast on malformed rule sources
        self.rule_sources: dict[str, PropertyPath] = {
            source: PropertyPath(source)
            for source in self.error_mapping
            if source != DOT_RULE
        }

    @property
    def effective_property_path(self) -> PropertyPath | None:
        """
        Path this field contributes when matching violations.

        Virtual fields contribute nothing. Otherwise the configured path is
        used, falling back to a single property element equal to the name.
        """
        if self.is_virtual:
            return None
        if self.property_path is not None:
            return self.property_path
        if not self.name:
            return None
        return PropertyPath([PathElement.of_property(self.name)])

    @property
    def root(self) -> "FieldNode":
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def add(self, child: "FieldNode") -> "FieldNode":
        """
        Attach a child field.

        Params:
            child: The field to attach; it must not belong to another parent

        Returns:
            This field, so calls can be chained

        Raises:
            FieldNameError: If the child has no name
            DuplicateChildError: If a child with the same name exists
            AmbiguousFieldPathError: If the child's data overlaps another field
                matched from the same owner
        """
        if not child.name:
            raise FieldNameError(child.name, "child fields must have a name")
        if child.name in self.children:
            raise DuplicateChildError(self.name, child.name)

        self._check_overlap(child)

        child.parent = self
        self.children[child.name] = child
        return self

    def has(self, name: str) -> bool:
        return name in self.children

    def get(self, name: str) -> "FieldNode":
        """Return the direct child with the given name, raising KeyError if missing."""
        return self.children[name]

    def all(self) -> list["FieldNode"]:
        return list(self.children.values())

    def add_error(self, error: FormError) -> None:
        self.errors.append(error)

    def has_errors(self) -> bool:
        return bool(self.errors)

    def _owner(self) -> "FieldNode":
        """Closest ancestor-or-self whose children are matched against data."""
        node = self
        while node.is_virtual and not node.is_root:
            node = node.parent
        return node

    def _check_overlap(self, child: "FieldNode") -> None:
        owner = self._owner()
        existing = [chain[-1] for chain in iter_mapped_children(owner)]
        if child.is_virtual:
            incoming = [chain[-1] for chain in iter_mapped_children(child)]
        elif child.is_mapped:
            incoming = [child]
        else:
            incoming = []

        for new in incoming:
            new_path = new.effective_property_path
            if new_path is None:
                continue
            for old in existing:
                old_path = old.effective_property_path
                if old_path is None:
                    continue
                if new_path.starts_with(old_path) or old_path.starts_with(new_path):
                    shorter = old_path if old_path.length <= new_path.length else new_path
                    raise AmbiguousFieldPathError(
                        owner.name, old.name, new.name, str(shorter)
                    )


def iter_mapped_children(node: FieldNode) -> Iterator[FieldChain]:
    """
    Yield the children of a field with virtual layers flattened.

    Each item is the chain of fields leading from `node` (exclusive) to a
    non-virtual descendant (inclusive); all fields before the last one in the
    chain are virtual. Unmapped fields are not bound to the data and are
    skipped.
    """
    for child in node.children.values():
        if child.is_virtual:
            for chain in iter_mapped_children(child):
                yield (child, *chain)
        elif child.is_mapped:
            yield (child,)


def iter_virtual_layers(node: FieldNode) -> Iterator[FieldChain]:
    """
    Yield the virtual descendants of a field reachable through virtual layers only.

    Each item is the chain from `node` (exclusive) to the virtual field (inclusive).
    """
    for child in node.children.values():
        if child.is_virtual:
            yield (child,)
            for chain in iter_virtual_layers(child):
                yield (child, *chain)
