import re
from typing import Any

from attrs import field, frozen
from pydantic import BaseModel, ConfigDict, Field


class Violation(BaseModel):
    """A validation failure reported by the validation engine.

    `property_path` addresses the failing value: "children[name]" elements
    select child fields, everything after "data" addresses the field's data.
    The empty path designates the root object itself.
    """

    model_config = ConfigDict(frozen=True)

    message: str
    parameters: dict[str, str] = Field(default_factory=dict)
    property_path: str = ""
    plural: int | None = None
    invalid_value: Any = None


@frozen
class FormError:
    """An error attached to a field, copied verbatim from a violation."""

    message: str
    parameters: dict[str, str] = field(factory=dict, converter=dict)
    plural: int | None = None

    @classmethod
    def from_violation(cls, violation: Violation) -> "FormError":
        return cls(
            message=violation.message,
            parameters=violation.parameters,
            plural=violation.plural,
        )

    def render(self) -> str:
        """Return the message with every parameter placeholder substituted.

        Placeholders are replaced in a single pass, longest first, so a
        substituted value is never substituted again.
        """
        placeholders = sorted(
            (key for key in self.parameters if key), key=len, reverse=True
        )
        if not placeholders:
            return self.message

        pattern = re.compile("|".join(re.escape(key) for key in placeholders))
        return pattern.sub(lambda match: self.parameters[match.group(0)], self.message)
