"""
Violation to field mapping.

Given a violation reported against a path into the form's data, the mapper
decides which field of the field tree receives the error. Mapping happens
from the root towards the leaves: the rules of the root determine the next
descendant, whose rules determine the next one and so on, until the most
specific field matching the violation is found.

If any field met on the way is not synchronized, mapping stops in front of
it. Such a field could not convert the submitted value, so violations caused
by its (invalid) data must not be shown on it or on its descendants.
"""

import logging
from dataclasses import dataclass

from formtree.core.field_node import (
    FieldChain,
    FieldNode,
    iter_mapped_children,
    iter_virtual_layers,
)
from formtree.core.path_utils import PropertyPath, PropertyPathBuilder
from formtree.mapping.rules import MappingRule
from formtree.models import FormError, Violation
from formtree.parsing.violation_path import ViolationPath

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RelativePath:
    """A data path relative to the field it must be matched from."""

    origin_chain: FieldChain
    path: PropertyPath | None


@dataclass(frozen=True)
class ChildMatch:
    """Result of matching the front of a path against a field's descendants."""

    chain: FieldChain
    consumed: int
    rule: MappingRule | None = None


class ViolationMapper:
    """Attaches errors built from violations to the fields they belong to.

    The mapper holds no state between calls; a single instance can serve any
    number of independent field trees.
    """

    def map_violation(self, violation: Violation, form: FieldNode) -> FieldNode:
        """
        Attach an error for `violation` to exactly one field of the tree under `form`.

        Params:
            violation: The violation to map
            form: Root of the field tree the violation was reported against

        Returns:
            The field that received the error

        Raises:
            InvalidPathFormatError: If the violation's property path is malformed
            ErrorMappingError: If a mapping rule met on the way names a missing child
        """
        violation_path = ViolationPath(violation.property_path)
        target = self.find_target(violation_path, form)
        target.add_error(FormError.from_violation(violation))

        logger.debug(
            "Mapped violation at '%s' to field '%s'",
            violation.property_path,
            target.name,
        )
        return target

    def find_target(self, violation_path: ViolationPath, form: FieldNode) -> FieldNode:
        """Return the field an error for `violation_path` should be attached to."""
        if not form.is_synchronized:
            logger.debug("Field '%s' is not synchronized, not descending", form.name)
            return form

        relative = self._reconstruct_path(violation_path, form)
        scope, blocked = self._enter(form, relative.origin_chain)
        if blocked:
            return scope

        match = False
        path = relative.path
        position = 0

        if path is not None:
            logger.debug("Matching '%s' from field '%s'", path, scope.name)
            while position < path.length:
                found = self._match_child(scope, path, position)
                if found is None:
                    break
                scope, blocked = self._enter(scope, found.chain)
                if blocked:
                    return scope
                position = found.consumed
                match = True

        if not match:
            # Nothing more specific than the origin matched: use the innermost
            # field named by the "children[...]" prefix of the violation path,
            # e.g. "bar" for "children[foo].children[bar].data.baz"
            scope, blocked = self._innermost_form(violation_path, form)
            if blocked:
                return scope

        return self._follow_dot_rules(scope)

    def _reconstruct_path(
        self, violation_path: ViolationPath, origin: FieldNode
    ) -> RelativePath:
        """
        Rewrite the child-selecting prefix of a violation path into data elements.

        "children[address]" is replaced with the property path of the child
        "address", virtual children are cut out and an unmapped child becomes
        the new origin with everything before it stripped.
        """
        builder = PropertyPathBuilder(violation_path.elements)
        origin_chain: FieldChain = ()
        walked: list[FieldNode] = []
        scope = origin
        offset = 0

        for name in violation_path.form_elements():
            if not scope.has(name):
                break

            scope = scope.get(name)
            walked.append(scope)

            if scope.is_virtual:
                builder.remove(offset)
            elif not scope.is_mapped:
                origin_chain = tuple(walked)
                builder.remove(0, offset + 1)
                offset = 0
            else:
                child_path = scope.effective_property_path
                builder.replace(offset, 1, child_path)
                offset += child_path.length

        return RelativePath(origin_chain, builder.get_property_path())

    def _match_child(
        self, form: FieldNode, path: PropertyPath, start: int
    ) -> ChildMatch | None:
        """
        Find the descendant of `form` addressed by the front of `path[start:]`.

        The path is grown element by element. Mapping rules are tested first
        and win as soon as one matches exactly. A child whose property path
        equals the current chunk is remembered, and returned once no rule can
        match a longer chunk anymore.
        """
        rules = self._collect_rules(form)
        candidates = list(iter_mapped_children(form))
        found: ChildMatch | None = None

        for end in range(start + 1, path.length + 1):
            chunk = path.slice(start, end)

            remaining = []
            for prefix, rule in rules:
                if rule.matches(chunk):
                    logger.debug(
                        "Rule '%s' => '%s' of field '%s' matched",
                        rule.source,
                        rule.target_path,
                        rule.origin.name,
                    )
                    return ChildMatch(prefix + rule.target_chain(), end, rule)
                if rule.is_prefix(chunk):
                    remaining.append((prefix, rule))
            rules = remaining

            if found is None:
                for chain in candidates:
                    if chain[-1].effective_property_path == chunk:
                        found = ChildMatch(chain, end)
                        break

            if found is not None and (end == path.length or not rules):
                return found

        return None

    def _collect_rules(self, form: FieldNode) -> list[tuple[FieldChain, MappingRule]]:
        """Rules of `form` followed by those of its virtual layers."""
        rules = [((), rule) for rule in MappingRule.from_field(form)]
        for chain in iter_virtual_layers(form):
            rules.extend((chain, rule) for rule in MappingRule.from_field(chain[-1]))
        return rules

    def _innermost_form(
        self, violation_path: ViolationPath, form: FieldNode
    ) -> tuple[FieldNode, bool]:
        scope = form
        for name in violation_path.form_elements():
            if not scope.has(name):
                break
            scope, blocked = self._enter(scope, (scope.get(name),))
            if blocked:
                return scope, True
        return scope, False

    def _follow_dot_rules(self, scope: FieldNode) -> FieldNode:
        rule = MappingRule.dot_rule(scope)
        while rule is not None:
            logger.debug("Following dot rule of field '%s' to '%s'", scope.name, rule.target_path)
            scope, blocked = self._enter(scope, rule.target_chain())
            if blocked:
                return scope
            rule = MappingRule.dot_rule(scope)
        return scope

    def _enter(self, scope: FieldNode, chain: FieldChain) -> tuple[FieldNode, bool]:
        """
        Descend along `chain`, stopping in front of an unsynchronized field.

        Returns:
            The deepest field entered and whether the descent was blocked
        """
        for child in chain:
            if not child.is_synchronized:
                logger.debug(
                    "Field '%s' is not synchronized, stopping at '%s'",
                    child.name,
                    scope.name,
                )
                return scope, True
            scope = child
        return scope, False


def map_violation(violation: Violation, form: FieldNode) -> FieldNode:
    """Map a violation onto the field tree under `form` with a default mapper."""
    return ViolationMapper().map_violation(violation, form)
