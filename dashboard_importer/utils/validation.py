"""
Structural validation for foreign dashboard documents.
"""

from collections.abc import Mapping


class DashboardValidationError(ValueError):
    """Raised when a document cannot be treated as a foreign dashboard."""

    def __init__(self, errors):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


def validate_dashboard(document):
    """
    Validate the top-level shape of a foreign dashboard document.

    Only structure is checked here. Field-level content (units, panel types,
    variable kinds) is never an error; the converters resolve it.

    Args:
        document: Parsed dashboard document

    Returns:
        list: List of validation errors, empty if valid
    """
    if not isinstance(document, Mapping):
        return [
            f"Dashboard document must be an object, got {type(document).__name__}"
        ]

    errors = []

    # Check required fields
    for field in ["panels", "templating"]:
        if field not in document or document[field] is None:
            errors.append(f"Missing required field: {field}")

    if document.get("panels") is not None and not isinstance(
        document["panels"], list
    ):
        errors.append("Field panels must be a list")

    templating = document.get("templating")
    if templating is not None:
        if not isinstance(templating, Mapping):
            errors.append("Field templating must be an object")
        elif templating.get("list") is not None and not isinstance(
            templating["list"], list
        ):
            errors.append("Field templating.list must be a list")

    if document.get("links") is not None and not isinstance(document["links"], list):
        errors.append("Field links must be a list")

    return errors
