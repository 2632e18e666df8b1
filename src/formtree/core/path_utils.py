"""
Property path parsing and manipulation utilities for formtree.

A property path addresses a location inside nested data with a sequence of
property (".name") and index ("[name]") elements, e.g. "person.addresses[0].street".
Paths are parsed once and are immutable afterwards.
"""

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Union

from formtree.exceptions import InvalidPathFormatError

# The first element may be a bare property name, every following one must be
# introduced by "." or enclosed in brackets
_HEAD_PATTERN = re.compile(r"([^.\[\]]+)|\[([^\[\]]+)\]")
_STEP_PATTERN = re.compile(r"\.([^.\[\]]+)|\[([^\[\]]+)\]")


class ElementKind(Enum):
    """How a path element addresses its slice of the data."""

    PROPERTY = "property"
    INDEX = "index"


@dataclass(frozen=True)
class PathElement:
    """One segment of a property path."""

    kind: ElementKind
    name: str

    @classmethod
    def of_property(cls, name: str) -> "PathElement":
        return cls(ElementKind.PROPERTY, name)

    @classmethod
    def of_index(cls, name: str) -> "PathElement":
        return cls(ElementKind.INDEX, name)

    @property
    def is_index(self) -> bool:
        return self.kind is ElementKind.INDEX

    @property
    def is_property(self) -> bool:
        return self.kind is ElementKind.PROPERTY

    def render(self, first: bool = False) -> str:
        """
        Render the element in path syntax.

        Params:
            first: Whether the element starts the path (no leading dot)

        Returns:
            "[name]" for index elements, ".name" or "name" for properties
        """
        if self.is_index:
            return f"[{self.name}]"
        return self.name if first else f".{self.name}"


def render_elements(elements: Iterable[PathElement]) -> str:
    """Render a sequence of elements back into path syntax."""
    return "".join(
        element.render(first=position == 0)
        for position, element in enumerate(elements)
    )


def parse_property_path(path: str) -> tuple[PathElement, ...]:
    """
    Parse a property path string into its elements.

    Params:
        path: Path string such as "address.street" or "[items][0].name"

    Returns:
        Tuple of PathElement in path order

    Raises:
        InvalidPathFormatError: If the string is empty or malformed

    Examples:
        "address.street" -> (PROPERTY address, PROPERTY street)
        "[address]street" -> InvalidPathFormatError
    """
    if not path or not isinstance(path, str):
        raise InvalidPathFormatError(path, "must be a non-empty string")

    elements = []
    position = 0
    pattern = _HEAD_PATTERN

    while position < len(path):
        match = pattern.match(path, position)
        if match is None:
            raise InvalidPathFormatError(
                path, f"unexpected '{path[position]}' at position {position}"
            )

        property_name, index_name = match.groups()
        if property_name is not None:
            elements.append(PathElement.of_property(property_name))
        else:
            elements.append(PathElement.of_index(index_name))

        position = match.end()
        pattern = _STEP_PATTERN

    return tuple(elements)


PathLike = Union[str, "PropertyPath", Iterable[PathElement]]


class PropertyPath:
    """
    Parsed, immutable property path.

    Two paths are equal when their elements are equal element by element,
    so "address.street" and "address[street]" are different paths.
    """

    __slots__ = ("_elements", "_string")

    def __init__(self, path: PathLike):
        if isinstance(path, PropertyPath):
            elements = path.elements
        elif isinstance(path, str):
            elements = parse_property_path(path)
        else:
            elements = tuple(path)
            if not elements:
                raise InvalidPathFormatError("", "must contain at least one element")

        self._elements: tuple[PathElement, ...] = elements
        self._string = render_elements(elements)

    @property
    def elements(self) -> tuple[PathElement, ...]:
        return self._elements

    @property
    def length(self) -> int:
        return len(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[PathElement]:
        return iter(self._elements)

    def __getitem__(self, position: int) -> PathElement:
        return self._elements[position]

    def __str__(self) -> str:
        return self._string

    def __repr__(self) -> str:
        return f"PropertyPath({self._string!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PropertyPath):
            return NotImplemented
        return self._elements == other._elements

    def __hash__(self) -> int:
        return hash(self._elements)

    def element_at(self, position: int) -> str:
        """Return the name of the element at the given position."""
        return self._elements[position].name

    def is_index(self, position: int) -> bool:
        return self._elements[position].is_index

    def is_property(self, position: int) -> bool:
        return self._elements[position].is_property

    @property
    def parent(self) -> "PropertyPath | None":
        """Return the path without its last element, None for single-element paths."""
        return self.ancestor(1)

    def ancestor(self, depth: int) -> "PropertyPath | None":
        """
        Return the path with its last `depth` elements removed.

        Params:
            depth: Number of trailing elements to drop

        Returns:
            The shortened path, or None if no element would remain
        """
        if depth < 0:
            raise ValueError("depth must not be negative")
        if depth >= self.length:
            return None
        return self.prefix(self.length - depth)

    def prefix(self, length: int) -> "PropertyPath":
        """Return the first `length` elements as a new path."""
        if not 0 < length <= self.length:
            raise IndexError(f"prefix length {length} out of range for '{self}'")
        if length == self.length:
            return self
        return PropertyPath(self._elements[:length])

    def suffix(self, start: int) -> "PropertyPath | None":
        """Return the elements from `start` on, None if nothing remains."""
        if start < 0:
            raise IndexError(f"start {start} out of range for '{self}'")
        if start >= self.length:
            return None
        return PropertyPath(self._elements[start:])

    def slice(self, start: int, stop: int) -> "PropertyPath":
        """Return the elements in [start, stop) as a new path."""
        if not 0 <= start < stop <= self.length:
            raise IndexError(f"slice [{start}:{stop}] out of range for '{self}'")
        return PropertyPath(self._elements[start:stop])

    def starts_with(self, other: "PropertyPath") -> bool:
        """Check if `other` is a structural prefix of this path (or equal to it)."""
        return self._elements[: other.length] == other.elements


class PropertyPathBuilder:
    """Mutable sequence of path elements used to rewrite paths step by step."""

    def __init__(self, elements: Iterable[PathElement] | None = None):
        self._elements: list[PathElement] = list(elements) if elements else []

    def __len__(self) -> int:
        return len(self._elements)

    def append(self, path: PathLike) -> None:
        self._elements.extend(PropertyPath(path).elements)

    def remove(self, offset: int, length: int = 1) -> None:
        """
        Remove `length` elements starting at `offset`.

        Raises:
            IndexError: If the range exceeds the current elements
        """
        if offset < 0 or length < 0 or offset + length > len(self._elements):
            raise IndexError(
                f"cannot remove {length} element(s) at {offset} from {len(self._elements)}"
            )
        del self._elements[offset : offset + length]

    def replace(self, offset: int, length: int, path: PathLike) -> None:
        """Replace `length` elements at `offset` with the elements of `path`."""
        if offset < 0 or length < 0 or offset + length > len(self._elements):
            raise IndexError(
                f"cannot replace {length} element(s) at {offset} of {len(self._elements)}"
            )
        self._elements[offset : offset + length] = PropertyPath(path).elements

    def get_property_path(self) -> PropertyPath | None:
        """Return the built path, None if no element is left."""
        if not self._elements:
            return None
        return PropertyPath(self._elements)
