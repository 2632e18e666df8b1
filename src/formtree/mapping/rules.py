"""
Error mapping rules.

A field may declare rules that redirect errors: the source is a property path
relative to the field's data, the target a dotted chain of descendant field
names. The source "." is a dot rule that applies to errors landing on the
field itself.
"""

from dataclasses import dataclass

from formtree.core.field_node import FieldChain, FieldNode
from formtree.core.path_utils import PropertyPath
from formtree.core.types import DOT_RULE
from formtree.exceptions import ErrorMappingError


@dataclass(frozen=True)
class MappingRule:
    """A redirection declared on `origin` from `source` to `target_path`."""

    origin: FieldNode
    source: PropertyPath | None
    target_path: str

    @classmethod
    def from_field(cls, origin: FieldNode) -> list["MappingRule"]:
        """Build the non-dot rules of a field in declaration order."""
        return [
            cls(origin, origin.rule_sources[source], target)
            for source, target in origin.error_mapping.items()
            if source != DOT_RULE
        ]

    @classmethod
    def dot_rule(cls, origin: FieldNode) -> "MappingRule | None":
        """Return the dot rule of a field, None if it declares none."""
        target = origin.error_mapping.get(DOT_RULE)
        if target is None:
            return None
        return cls(origin, None, target)

    def matches(self, chunk: PropertyPath) -> bool:
        """Check if the rule's source equals the chunk element by element."""
        return self.source is not None and self.source == chunk

    def is_prefix(self, chunk: PropertyPath) -> bool:
        """Check if a longer chunk starting with `chunk` could still match."""
        return (
            self.source is not None
            and self.source.length > chunk.length
            and self.source.starts_with(chunk)
        )

    def target_chain(self) -> FieldChain:
        """
        Resolve the target names starting at the origin.

        Returns:
            The fields from the origin (exclusive) to the target (inclusive)

        Raises:
            ErrorMappingError: If a name in the target does not exist
        """
        chain = []
        target = self.origin
        for child_name in self.target_path.split("."):
            if not target.has(child_name):
                raise ErrorMappingError(self.target_path, child_name, self.origin.name)
            target = target.get(child_name)
            chain.append(target)
        return tuple(chain)
