"""Station configuration validation with helpful error messages and suggestions.

Out-of-range and off-catalog values are programming errors: they are rejected
with a ``ValidationError`` naming the field, the allowed range or choices, and
the closest valid alternative where one exists.
"""

from __future__ import annotations

from difflib import get_close_matches
from enum import Enum
from typing import Any, Iterable, List, Optional, Sequence, Type


class ValidationError(ValueError):
    """Validation error with suggestions and detailed guidance."""

    pass


class ConfigValidator:
    """Validates station parameters with helpful error messages."""

    @staticmethod
    def suggest_correction(
        invalid: str, valid_options: List[str], n: int = 1, cutoff: float = 0.6
    ) -> Optional[str]:
        """Suggest closest match using difflib similarity.

        Parameters
        ----------
        invalid : str
            Invalid value provided by caller
        valid_options : List[str]
            List of valid options
        n : int, optional
            Number of suggestions to return, by default 1
        cutoff : float, optional
            Similarity threshold (0-1), by default 0.6

        Returns
        -------
        Optional[str]
            Closest match if found, None otherwise
        """
        matches = get_close_matches(invalid, valid_options, n=n, cutoff=cutoff)
        return matches[0] if matches else None

    @classmethod
    def format_enum_error(
        cls,
        param_name: str,
        invalid_value: Any,
        valid_options: List[str],
    ) -> str:
        """Format error message for invalid enum values with a suggestion.

        Parameters
        ----------
        param_name : str
            Name of the parameter
        invalid_value : Any
            Invalid value provided
        valid_options : List[str]
            List of valid options

        Returns
        -------
        str
            Formatted error message
        """
        lines = [f"Invalid {param_name}: '{invalid_value}'\n"]

        lines.append("Valid options:")
        for option in valid_options:
            lines.append(f"  - '{option}'")

        suggestion = cls.suggest_correction(str(invalid_value), valid_options)
        if suggestion:
            lines.append(f"\nDid you mean '{suggestion}'?")

        return "\n".join(lines)

    @classmethod
    def format_range_error(
        cls,
        param_name: str,
        invalid_value: Any,
        valid_range: str,
        typical_values: Optional[str] = None,
    ) -> str:
        """Format error message for out-of-range values.

        Parameters
        ----------
        param_name : str
            Name of the parameter
        invalid_value : Any
            Invalid value provided
        valid_range : str
            Description of valid range (e.g., "positive", "[0, 1]")
        typical_values : Optional[str], optional
            Examples of typical values

        Returns
        -------
        str
            Formatted error message
        """
        lines = [f"Invalid {param_name}: {invalid_value}"]
        lines.append(f"  → Must be {valid_range}")

        if typical_values:
            lines.append(f"  → Typical values: {typical_values}")

        return "\n".join(lines)

    @classmethod
    def validate_range(
        cls,
        value: Any,
        param_name: str,
        low: float,
        high: float,
        typical_values: Optional[str] = None,
    ) -> None:
        """Validate that a numeric value lies within ``[low, high]``.

        Non-numeric values, booleans and NaN are rejected as well.

        Raises
        ------
        ValidationError
            If the value is outside the range
        """
        is_number = isinstance(value, (int, float)) and not isinstance(value, bool)
        if not is_number or not (low <= value <= high):
            raise ValidationError(
                cls.format_range_error(param_name, value, f"in [{low}, {high}]", typical_values)
            )

    @classmethod
    def validate_integer(cls, value: Any, param_name: str, low: int, high: int) -> None:
        """Validate an integer within ``[low, high]``."""
        if isinstance(value, bool) or not isinstance(value, int) or not (low <= value <= high):
            raise ValidationError(
                cls.format_range_error(param_name, value, f"an integer in [{low}, {high}]")
            )

    @classmethod
    def validate_grid(cls, value: Any, param_name: str, grid: Sequence[float]) -> None:
        """Validate that a value is one of a fixed catalog grid.

        The error suggests the nearest grid value.

        Raises
        ------
        ValidationError
            If the value is not on the grid
        """
        is_number = isinstance(value, (int, float)) and not isinstance(value, bool)
        if is_number and any(value == g for g in grid):
            return

        lines = [f"Invalid {param_name}: {value}"]
        lines.append(f"  → Must be one of {list(grid)}")
        if is_number and value == value:
            nearest = min(grid, key=lambda g: abs(g - value))
            lines.append(f"\nDid you mean {nearest}?")
        raise ValidationError("\n".join(lines))

    @classmethod
    def validate_enum(cls, value: Any, param_name: str, enum_cls: Type[Enum]) -> None:
        """Validate that a value is a member of ``enum_cls``.

        Raises
        ------
        ValidationError
            If the value is not a member
        """
        if isinstance(value, enum_cls):
            return
        raise ValidationError(
            cls.format_enum_error(param_name, value, [m.value for m in enum_cls])
        )

    @classmethod
    def validate_field_names(cls, names: Iterable[str], valid_names: List[str]) -> None:
        """Reject unknown field names in a partial update.

        Raises
        ------
        ValidationError
            On the first unknown name, with a spelling suggestion
        """
        for name in names:
            if name in valid_names:
                continue
            msg = f"Unknown configuration field: '{name}'"
            suggestion = cls.suggest_correction(name, valid_names)
            if suggestion:
                msg += f"\n\nDid you mean '{suggestion}'?"
            raise ValidationError(msg)
