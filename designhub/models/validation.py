"""Attribute validators shared by the content models."""

from typing import Optional

from ..core.exceptions import ValidationError


def clean_text(
    field: str,
    value: Optional[str],
    *,
    max_length: int,
    min_length: int = 1,
    label: Optional[str] = None,
) -> str:
    """Trim ``value`` and enforce its length bounds.

    Returns the trimmed string so validators can store it directly.
    """
    label = label or field.replace("_", " ").capitalize()
    if value is None or not str(value).strip():
        raise ValidationError(field, f"{label} is required")

    value = str(value).strip()
    if len(value) < min_length:
        raise ValidationError(field, f"{label} must be at least {min_length} characters")
    if len(value) > max_length:
        raise ValidationError(field, f"{label} cannot be more than {max_length} characters")
    return value
