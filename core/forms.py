import json

from core.errors import ValidationError


def require_fields(*values) -> None:
    """Presence check for form fields: None and blank strings count as missing."""
    for value in values:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError("All fields are required")


def parse_string_list(raw: str, field: str) -> list[str]:
    """Decode a JSON array of strings sent as a single form field."""
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValidationError(f"{field} must be a JSON array") from exc
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValidationError(f"{field} must be a JSON array of strings")
    # Keep order, drop duplicates
    return list(dict.fromkeys(value))
