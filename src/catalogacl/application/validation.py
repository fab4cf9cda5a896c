"""Input checks shared by use cases."""

from catalogacl.domain.exceptions import ValidationError

MAX_NAME_LENGTH = 256


def require_name(label: str, name: str) -> str:
    """Return the stripped name or raise ValidationError."""
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(f"{label} name must not be empty")
    name = name.strip()
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(f"{label} name exceeds {MAX_NAME_LENGTH} characters")
    return name


def require_properties(properties: dict | None) -> dict[str, str]:
    """Return a copy of a string-to-string map or raise ValidationError."""
    if properties is None:
        return {}
    if not isinstance(properties, dict):
        raise ValidationError("properties must be an object of strings")
    for key, value in properties.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise ValidationError("properties must map strings to strings")
    return dict(properties)
