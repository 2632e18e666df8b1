"""
Tests for FieldNode construction and traversal.

Focus Areas:
1. Effective property path of plain, custom and virtual fields
2. Tree building: names, duplicates and overlapping property paths
3. Virtual-aware traversal helpers
"""

import pytest

from formtree import FieldNode, FormError
from formtree.core.field_node import iter_mapped_children, iter_virtual_layers
from formtree.core.path_utils import PropertyPath
from formtree.exceptions import (
    AmbiguousFieldPathError,
    DuplicateChildError,
    FieldNameError,
    InvalidPathFormatError,
)


class TestEffectivePropertyPath:
    """Test the path a field contributes during matching."""

    def test_defaults_to_name(self):
        """Without a configured path the name is used as a property element."""
        assert FieldNode("street").effective_property_path == PropertyPath("street")

    def test_configured_string_is_parsed(self):
        """A configured string path is parsed on creation."""
        field = FieldNode("street", "[office][street]")

        assert field.property_path == PropertyPath("[office][street]")
        assert field.effective_property_path == PropertyPath("[office][street]")

    def test_virtual_contributes_nothing(self):
        """Virtual fields ignore their configured path."""
        assert FieldNode("address", "address", is_virtual=True).effective_property_path is None

    def test_anonymous_root_contributes_nothing(self):
        """An unnamed root has no path of its own."""
        assert FieldNode("").effective_property_path is None

    def test_malformed_path_fails_fast(self):
        """Invalid configured paths are rejected at construction."""
        with pytest.raises(InvalidPathFormatError):
            FieldNode("street", "street.")


class TestFieldConstruction:
    """Test field validation on creation."""

    @pytest.mark.parametrize("name", ["street", "street_1", "_street", "1st", "a-b", "a:b"])
    def test_valid_names(self, name):
        """Letters, digits, underscores, hyphens and colons are allowed."""
        assert FieldNode(name).name == name

    @pytest.mark.parametrize("name", ["a.b", "a[b]", "-a", "a b"])
    def test_invalid_names(self, name):
        """Names that could be confused with path syntax are rejected."""
        with pytest.raises(FieldNameError):
            FieldNode(name)

    def test_rule_sources_are_parsed(self):
        """Rule sources are parsed, the dot rule is kept aside."""
        field = FieldNode("parent", error_mapping={"foo[bar]": "address", ".": "street"})

        assert field.rule_sources == {"foo[bar]": PropertyPath("foo[bar]")}

    def test_malformed_rule_source_fails_fast(self):
        """Invalid rule sources are rejected at construction."""
        with pytest.raises(InvalidPathFormatError):
            FieldNode("parent", error_mapping={"foo.": "address"})

    def test_error_mapping_is_copied(self):
        """Later changes to the passed mapping do not leak into the field."""
        mapping = {"foo": "address"}
        field = FieldNode("parent", error_mapping=mapping)
        mapping["bar"] = "street"

        assert field.error_mapping == {"foo": "address"}


class TestTreeBuilding:
    """Test adding children."""

    def test_add_links_parent_and_child(self):
        """Adding sets the parent and keeps insertion order."""
        parent = FieldNode("parent")
        first = FieldNode("first")
        second = FieldNode("second")

        assert parent.add(first).add(second) is parent
        assert first.parent is parent
        assert parent.all() == [first, second]
        assert parent.has("first")
        assert parent.get("second") is second
        assert second.root is parent
        assert parent.is_root and not second.is_root

    def test_get_missing_child(self):
        """Missing children raise KeyError."""
        with pytest.raises(KeyError):
            FieldNode("parent").get("missing")

    def test_duplicate_name_is_rejected(self):
        """Two children cannot share a name."""
        parent = FieldNode("parent").add(FieldNode("street"))

        with pytest.raises(DuplicateChildError) as exc_info:
            parent.add(FieldNode("street", "[street]"))

        assert exc_info.value.child_name == "street"

    def test_unnamed_child_is_rejected(self):
        """Only the root may be anonymous."""
        with pytest.raises(FieldNameError):
            FieldNode("parent").add(FieldNode(""))

    def test_equal_sibling_paths_are_rejected(self):
        """Siblings addressing the same data are ambiguous."""
        parent = FieldNode("parent").add(FieldNode("street"))

        with pytest.raises(AmbiguousFieldPathError) as exc_info:
            parent.add(FieldNode("road", "street"))

        assert exc_info.value.first_name == "street"
        assert exc_info.value.second_name == "road"

    def test_nested_sibling_paths_are_rejected(self):
        """A sibling addressing data inside another sibling's data is ambiguous."""
        parent = FieldNode("parent").add(FieldNode("person"))

        with pytest.raises(AmbiguousFieldPathError) as exc_info:
            parent.add(FieldNode("address", "person.address"))

        assert exc_info.value.path == "person"

    def test_property_and_index_siblings_coexist(self):
        """Property "street" and index "[street]" address different data."""
        parent = FieldNode("parent")
        parent.add(FieldNode("street")).add(FieldNode("street_index", "[street]"))

        assert len(parent.all()) == 2

    def test_overlap_through_virtual_layer_is_rejected(self):
        """Children of virtual fields compete with the owner's other children."""
        parent = FieldNode("parent").add(FieldNode("street"))
        address = FieldNode("address", is_virtual=True)
        parent.add(address)

        with pytest.raises(AmbiguousFieldPathError) as exc_info:
            address.add(FieldNode("road", "street"))

        assert exc_info.value.owner_name == "parent"

    def test_overlap_when_adding_virtual_subtree(self):
        """Attaching a populated virtual field checks its flattened children."""
        parent = FieldNode("parent").add(FieldNode("street"))
        address = FieldNode("address", is_virtual=True).add(FieldNode("road", "street"))

        with pytest.raises(AmbiguousFieldPathError):
            parent.add(address)

    def test_virtual_siblings_do_not_conflict_by_name_path(self):
        """Virtual fields contribute no path, so their names never collide with data."""
        parent = FieldNode("parent").add(FieldNode("address", is_virtual=True))
        parent.add(FieldNode("other", "address"))

        assert parent.has("other")


class TestErrors:
    """Test error storage."""

    def test_add_error(self):
        """Errors accumulate in order."""
        field = FieldNode("street")
        error = FormError("Message", {"foo": "bar"})

        assert not field.has_errors()

        field.add_error(error)

        assert field.has_errors()
        assert field.errors == [error]


class TestTraversal:
    """Test virtual-aware traversal helpers."""

    def test_iter_mapped_children_flattens_virtual_layers(self):
        """Virtual fields are replaced by their non-virtual descendants."""
        parent = FieldNode("parent")
        outer = FieldNode("outer", is_virtual=True)
        inner = FieldNode("inner", is_virtual=True)
        street = FieldNode("street")
        city = FieldNode("city")
        parent.add(outer).add(city)
        outer.add(inner)
        inner.add(street)

        chains = list(iter_mapped_children(parent))

        assert chains == [(outer, inner, street), (city,)]

    def test_iter_virtual_layers(self):
        """Virtual descendants are yielded with the chain leading to them."""
        parent = FieldNode("parent")
        outer = FieldNode("outer", is_virtual=True)
        inner = FieldNode("inner", is_virtual=True)
        plain = FieldNode("plain")
        hidden = FieldNode("hidden", is_virtual=True)
        parent.add(outer).add(plain)
        outer.add(inner)
        plain.add(hidden)

        assert list(iter_virtual_layers(parent)) == [(outer,), (outer, inner)]

    def test_iter_mapped_children_skips_unmapped_fields(self):
        """Unmapped fields are not matched against data."""
        parent = FieldNode("parent")
        unmapped = FieldNode("unmapped", is_mapped=False)
        street = FieldNode("street")
        parent.add(unmapped).add(street)

        assert list(iter_mapped_children(parent)) == [(street,)]

    def test_unmapped_field_does_not_overlap(self):
        """An unmapped field may share its name path with a mapped sibling."""
        parent = FieldNode("parent").add(FieldNode("street"))
        parent.add(FieldNode("street_copy", "street", is_mapped=False))

        assert parent.has("street_copy")
