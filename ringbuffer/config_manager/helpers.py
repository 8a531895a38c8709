"""Helpers for parsing slot-count configuration values."""


def parse_size(value: int | str) -> int:
    """Parse a slot count from an integer or unit-suffixed string.

    Supported string units (case-insensitive):
        k, m (powers of 1024)

    Args:
        value: Raw slot count as an ``int`` or string with an optional unit
            suffix.

    Returns:
        The parsed slot count.

    Raises:
        ValueError: If the input cannot be parsed or contains an unknown unit.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid size value: {value!r}")
    if isinstance(value, int):
        return value

    normalized_value = str(value).strip().lower()

    if normalized_value.isdigit():
        return int(normalized_value)

    numeric_part = ""
    unit_suffix = ""
    for character in normalized_value:
        if character.isdigit() and not unit_suffix:
            numeric_part += character
        else:
            unit_suffix += character

    if not numeric_part or not unit_suffix:
        raise ValueError(f"Invalid size value: {value!r}")

    base_value = int(numeric_part)
    if unit_suffix == "k":
        multiplier = 1024
    elif unit_suffix == "m":
        multiplier = 1024**2
    else:
        raise ValueError(f"Unknown size unit in value: {value!r}")

    return base_value * multiplier
