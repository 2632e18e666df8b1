"""
Violation path interpretation.

The validation engine reports paths that address the field tree and its data
at once, e.g. "children[address].children[street].data.number". This module
turns such strings into a ViolationPath: a sequence of path elements where
each element knows whether it selects a child field ("children[...]") or a
piece of data (anything after "data").
"""

from collections.abc import Iterator
from dataclasses import dataclass

from formtree.core.path_utils import PathElement, PropertyPath
from formtree.core.types import CHILDREN_ELEMENT, DATA_ELEMENT


@dataclass(frozen=True)
class ViolationPathElement:
    """A path element tagged with whether it selects a child field."""

    element: PathElement
    maps_form: bool

    @property
    def name(self) -> str:
        return self.element.name

    @property
    def is_index(self) -> bool:
        return self.element.is_index


class ViolationPath:
    """
    Parsed violation path.

    Reading the parsed path left to right:
      - "children[name]" selects the child field `name`
      - "data" switches to data addressing, all following elements are kept as is
      - anything else before "data" ends the path

    The empty string yields an empty path, which designates the root.

    Raises:
        InvalidPathFormatError: If a non-empty path string is malformed
    """

    def __init__(self, violation_path: str):
        self.original = violation_path
        self._elements: tuple[ViolationPathElement, ...] = (
            tuple(self._interpret(PropertyPath(violation_path)))
            if violation_path
            else ()
        )

    @staticmethod
    def _interpret(path: PropertyPath) -> Iterator[ViolationPathElement]:
        position = 0
        length = path.length

        while position < length:
            element = path[position]

            if element.is_property and element.name == CHILDREN_ELEMENT:
                position += 1
                # "children" must be followed by the index of the child
                if position >= length or not path.is_index(position):
                    return
                yield ViolationPathElement(path[position], maps_form=True)
                position += 1
            elif element.is_property and element.name == DATA_ELEMENT:
                for data_element in path.elements[position + 1 :]:
                    yield ViolationPathElement(data_element, maps_form=False)
                return
            else:
                return

    @property
    def length(self) -> int:
        return len(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[ViolationPathElement]:
        return iter(self._elements)

    def __getitem__(self, position: int) -> ViolationPathElement:
        return self._elements[position]

    @property
    def elements(self) -> tuple[PathElement, ...]:
        return tuple(item.element for item in self._elements)

    def element_at(self, position: int) -> str:
        return self._elements[position].name

    def is_index(self, position: int) -> bool:
        return self._elements[position].is_index

    def maps_form(self, position: int) -> bool:
        return self._elements[position].maps_form

    def form_elements(self) -> Iterator[str]:
        """Yield the names of the leading child-selecting elements."""
        for item in self._elements:
            if not item.maps_form:
                return
            yield item.name

    def __str__(self) -> str:
        parts = []
        in_data = False
        for item in self._elements:
            if item.maps_form:
                parts.append(f".{CHILDREN_ELEMENT}[{item.name}]")
                continue
            if not in_data:
                parts.append(f".{DATA_ELEMENT}")
                in_data = True
            parts.append(item.element.render())
        return "".join(parts).lstrip(".")

    def __repr__(self) -> str:
        return f"ViolationPath({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ViolationPath):
            return NotImplemented
        return self._elements == other._elements

    def __hash__(self) -> int:
        return hash(self._elements)
