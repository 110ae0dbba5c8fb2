"""
Nested field lookup over parsed foreign documents.
"""

from collections.abc import Mapping


def get_field(record, path, default=None):
    """
    Read a nested value from a parsed document without raising.

    Args:
        record: Mapping (or list) to read from
        path (str | tuple): Dotted path such as ``"fieldConfig.defaults.unit"``
            or a tuple of keys; integer segments index into lists
        default: Value returned when any step of the path is missing

    Returns:
        The value found at ``path``, or ``default``
    """
    keys = path.split(".") if isinstance(path, str) else path
    current = record
    for key in keys:
        if isinstance(current, Mapping):
            if key not in current:
                return default
            current = current[key]
        elif isinstance(current, list):
            try:
                current = current[int(key)]
            except (ValueError, IndexError):
                return default
        else:
            return default
    if current is None:
        return default
    return current
