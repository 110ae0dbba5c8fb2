"""
Common panel options conversion (units, legend, tooltip, thresholds).
"""

import copy
from types import MappingProxyType

from dashboard_importer.converters.thresholds import convert_thresholds
from dashboard_importer.converters.fields import get_field

LEGACY_GRAPH_TYPE = "graph"

UNIT_MAP = MappingProxyType(
    {
        "percent": "percent",
        "percentunit": "percentUnit",
        "bytes": "bytesIEC",
        "bits": "bytesIEC",
        "decbytes": "bytesSI",
        "decbits": "bitsSI",
        "s": "seconds",
        "ms": "milliseconds",
    }
)
DEFAULT_UNIT = "none"

# Built-in options of a new time series panel, used as-is for legacy graphs.
DEFAULT_PANEL_OPTIONS = MappingProxyType(
    {
        "tooltip": {"mode": "all", "sort": "desc"},
        "legend": {"displayMode": "hidden"},
        "standardOptions": {},
        "thresholds": {
            "steps": [{"color": "#634CD9", "value": None, "type": "base"}],
        },
    }
)


def convert_unit(unit):
    return UNIT_MAP.get(unit, DEFAULT_UNIT) if isinstance(unit, str) else DEFAULT_UNIT


def convert_tooltip_mode(tooltip):
    # Only the bare string form selects single mode; nested objects fall back.
    return "single" if tooltip == "single" else "multi"


def convert_options(panel):
    """
    Convert the shared visual options of a foreign panel.

    Legacy graph panels get the built-in defaults instead of a migration.
    Per-field override rules are not supported and are ignored.

    Args:
        panel (dict): Foreign panel

    Returns:
        dict: Internal ``options`` block, empty when the panel has no
        field-config defaults
    """
    if panel.get("type") == LEGACY_GRAPH_TYPE:
        return copy.deepcopy(dict(DEFAULT_PANEL_OPTIONS))

    defaults = get_field(panel, "fieldConfig.defaults")
    if not isinstance(defaults, dict):
        return {}

    options = get_field(panel, "options", {})
    legend = get_field(options, "legend", {})

    return {
        "valueMappings": defaults.get("mappings"),
        "thresholds": convert_thresholds(defaults),
        "standardOptions": {
            "util": convert_unit(defaults.get("unit")),
            "min": defaults.get("min"),
            "max": defaults.get("max"),
            "decimals": defaults.get("decimals"),
        },
        "legend": {
            "displayMode": "hidden"
            if get_field(legend, "displayMode") == "hidden"
            else "list",
            "placement": get_field(legend, "placement"),
        },
        "tooltip": {"mode": convert_tooltip_mode(get_field(options, "tooltip"))},
    }
