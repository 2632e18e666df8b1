"""
Shared test fixtures and utilities for the formtree test suite.
"""

import pytest

from formtree import FieldNode, FormError, Violation, ViolationMapper

MESSAGE = "Message"
PARAMETERS = {"foo": "bar"}


@pytest.fixture
def mapper():
    return ViolationMapper()


@pytest.fixture
def make_violation():
    """Factory for violations sharing one message and parameter set.

    Usage:
        def test_something(make_violation):
            violation = make_violation("children[address].data.street")
    """

    def factory(property_path: str) -> Violation:
        return Violation(
            message=MESSAGE, parameters=PARAMETERS, property_path=property_path
        )

    return factory


@pytest.fixture
def expected_error():
    return FormError(MESSAGE, PARAMETERS)


@pytest.fixture
def address_tree():
    """parent -> address -> street, every field addressing data by its name."""
    parent = FieldNode("parent")
    address = FieldNode("address")
    street = FieldNode("street")
    parent.add(address)
    address.add(street)
    return parent, address, street


def _fields_with_errors(root: FieldNode) -> list[str]:
    found = [root.name] if root.has_errors() else []
    for child in root.all():
        found.extend(_fields_with_errors(child))
    return found


@pytest.fixture
def fields_with_errors():
    """Names of all fields under a root (inclusive) holding errors, depth first."""
    return _fields_with_errors
