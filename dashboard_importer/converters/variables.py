"""
Template variable conversion.
"""

import logging

from dashboard_importer.converters.fields import get_field

logger = logging.getLogger(__name__)

SUPPORTED_VARIABLE_TYPES = frozenset({"query", "custom", "textbox", "constant"})


def convert_query_variable(variable):
    return {
        "type": "query",
        "name": variable.get("name"),
        "definition": variable.get("definition")
        or get_field(variable, "query.query"),
        "allValue": variable.get("allValue"),
        "allOption": variable.get("includeAll"),
        "multi": variable.get("multi"),
        "reg": variable.get("regex"),
    }


def convert_custom_variable(variable):
    return {
        "type": "custom",
        "name": variable.get("name"),
        "definition": variable.get("query"),
        "allValue": variable.get("allValue"),
        "allOption": variable.get("includeAll"),
        "multi": variable.get("multi"),
    }


def convert_constant_variable(variable):
    return {
        "type": "constant",
        "name": variable.get("name"),
        "definition": variable.get("query"),
    }


def convert_textbox_variable(variable):
    return {
        "type": "textbox",
        "name": variable.get("name"),
        "defaultValue": variable.get("query"),
    }


VARIABLE_CONVERTERS = {
    "query": convert_query_variable,
    "custom": convert_custom_variable,
    "constant": convert_constant_variable,
    "textbox": convert_textbox_variable,
}


def is_supported_variable(variable):
    if not isinstance(variable, dict):
        return False
    kind = variable.get("type")
    return isinstance(kind, str) and kind in SUPPORTED_VARIABLE_TYPES


def convert_variables(templating):
    """
    Convert a foreign ``templating`` block into the internal variable list.

    Variable kinds with no internal equivalent (datasource, interval, ...)
    are skipped. Order is preserved and nothing is deduplicated.

    Args:
        templating (dict): Foreign ``templating`` object

    Returns:
        list: Internal variables
    """
    variables = []
    for variable in get_field(templating, "list", []):
        if not is_supported_variable(variable):
            logger.debug(
                f"Skipping unsupported variable {get_field(variable, 'name')!r} "
                f"of type {get_field(variable, 'type')!r}"
            )
            continue
        variables.append(VARIABLE_CONVERTERS[variable["type"]](variable))
    return variables
