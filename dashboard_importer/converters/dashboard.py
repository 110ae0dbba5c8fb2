"""
Dashboard conversion entry point.
"""

import uuid

from dashboard_importer.converters.links import convert_links
from dashboard_importer.converters.panels import SCHEMA_VERSION, convert_panels
from dashboard_importer.converters.variables import convert_variables
from dashboard_importer.utils.validation import (DashboardValidationError,
                                                 validate_dashboard)


def default_id_factory():
    return str(uuid.uuid4())


def convert_dashboard(document, id_factory=None):
    """
    Convert a foreign dashboard document into the internal dashboard schema.

    The input is not modified. Field-level anomalies resolve to defaults or
    are dropped; only a structurally invalid document raises.

    Args:
        document (dict): Parsed foreign dashboard
        id_factory (callable, optional): Returns a new unique panel id on
            each call; defaults to random UUID4 strings

    Returns:
        dict: ``{"version", "name", "configs": {"version", "links", "var", "panels"}}``

    Raises:
        DashboardValidationError: If the document lacks its required structure
    """
    errors = validate_dashboard(document)
    if errors:
        raise DashboardValidationError(errors)

    id_factory = id_factory or default_id_factory

    return {
        "version": SCHEMA_VERSION,
        "name": document.get("title"),
        "configs": {
            "version": SCHEMA_VERSION,
            "links": convert_links(document.get("links")),
            "var": convert_variables(document["templating"]),
            "panels": convert_panels(document["panels"], id_factory),
        },
    }
