"""Custom exceptions for configuration management."""

from typing import List, Optional, Sequence

from pydantic import ValidationError

_SCALAR_TYPE_ERRORS = ("int_type", "int_parsing", "bool_type", "string_type")


class ConfigurationError(Exception):
    """
    Raised when the cleaner configuration cannot be loaded.

    Covers unreadable or malformed YAML, schema violations and bad
    environment overrides. ``str(error)`` lists every problem found along
    with suggestions, so the CLI can print it as-is before exiting.

    Attributes:
        message: One-line summary
        errors: Individual problems, one per offending field or variable
        suggestions: Hints for fixing the problems
    """

    def __init__(
        self,
        message: str,
        errors: Optional[Sequence[str]] = None,
        suggestions: Optional[Sequence[str]] = None,
    ):
        self.message = message
        self.errors: List[str] = list(errors or [])
        self.suggestions: List[str] = list(suggestions or [])
        super().__init__(self.render())

    @classmethod
    def from_validation_error(
        cls,
        message: str,
        error: ValidationError,
        suggestions: Optional[Sequence[str]] = None,
    ) -> "ConfigurationError":
        """Build an error with one readable line per pydantic error item."""
        return cls(message, errors=describe_validation_error(error), suggestions=suggestions)

    def render(self) -> str:
        lines = [self.message]
        if self.errors:
            lines.append("\nValidation Errors:")
            lines.extend(f"  {number}. {text}" for number, text in enumerate(self.errors, 1))
        if self.suggestions:
            lines.append("\nSuggestions:")
            lines.extend(f"  - {hint}" for hint in self.suggestions)
        return "\n".join(lines)


def describe_validation_error(error: ValidationError) -> List[str]:
    """Turn pydantic error items into ``section -> field`` messages."""
    described = []
    for item in error.errors():
        field_path = " -> ".join(str(part) for part in item["loc"])
        kind = item["type"]

        if kind in _SCALAR_TYPE_ERRORS:
            expected = kind.split("_")[0]
            described.append(
                f"Invalid type for '{field_path}': expected {expected}, got {item.get('input')!r}"
            )
        elif "enum" in kind:
            described.append(f"Invalid value for '{field_path}': {item['msg']}")
        else:
            described.append(f"{field_path}: {item['msg']}")
    return described
