"""
Panel tree conversion: type dispatch, per-type custom options, targets and
the recursive walk over row containers.
"""

import logging
from collections import namedtuple
from enum import Enum

from dashboard_importer.converters.links import convert_links
from dashboard_importer.converters.options import convert_options
from dashboard_importer.converters.fields import get_field

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "2.0.0"
ROW_TYPE = "row"

# Dynamic range macros are not evaluated, only replaced by a fixed window.
# Every occurrence in an expression is replaced, not just the first one.
RANGE_MACROS = ("$__rate_interval", "$__interval")
RANGE_MACRO_WINDOW = "5m"

DEFAULT_FILL_OPACITY = 0.5


class PanelType(str, Enum):
    ROW = "row"
    TIMESERIES = "timeseries"
    PIE = "pie"
    GAUGE = "gauge"
    STAT = "stat"
    BAR_GAUGE = "barGauge"
    TEXT = "text"
    UNKNOWN = "unknown"


def _first_calc(panel):
    return get_field(panel, "options.reduceOptions.calcs.0")


def convert_timeseries_custom(panel):
    line_interpolation = get_field(panel, "fieldConfig.defaults.custom.lineInterpolation")
    fill_opacity = get_field(panel, "fieldConfig.defaults.custom.fillOpacity")
    stack = get_field(panel, "fieldConfig.defaults.custom.stacking.mode")
    return {
        "version": SCHEMA_VERSION,
        "drawStyle": "bars" if panel.get("type") == "barchart" else "lines",
        "lineInterpolation": "smooth" if line_interpolation == "smooth" else "linear",
        "fillOpacity": fill_opacity / 100
        if isinstance(fill_opacity, (int, float)) and not isinstance(fill_opacity, bool)
        else DEFAULT_FILL_OPACITY,
        "stack": "normal" if stack == "normal" else "off",
    }


def convert_pie_custom(panel):
    return {
        "version": SCHEMA_VERSION,
        "calc": _first_calc(panel),
        "legendPosition": "hidden",
    }


def convert_stat_custom(panel):
    return {
        "version": SCHEMA_VERSION,
        "textMode": "value",
        "calc": _first_calc(panel),
        "colorMode": "value",
    }


def convert_gauge_custom(panel):
    return {
        "version": SCHEMA_VERSION,
        "textMode": "value",
        "calc": _first_calc(panel),
        "colorMode": "value",
    }


def convert_bar_gauge_custom(panel):
    return {"version": SCHEMA_VERSION, "calc": _first_calc(panel)}


def convert_text_custom(panel):
    return {"version": SCHEMA_VERSION, "content": get_field(panel, "options.content")}


def convert_unknown_custom(panel):
    return {}


PanelConversion = namedtuple("PanelConversion", ["type", "custom"])

PANEL_TYPES = {
    # legacy line chart
    "graph": PanelConversion(PanelType.TIMESERIES, convert_timeseries_custom),
    "timeseries": PanelConversion(PanelType.TIMESERIES, convert_timeseries_custom),
    "barchart": PanelConversion(PanelType.TIMESERIES, convert_timeseries_custom),
    "piechart": PanelConversion(PanelType.PIE, convert_pie_custom),
    "gauge": PanelConversion(PanelType.GAUGE, convert_gauge_custom),
    # legacy single stat
    "singlestat": PanelConversion(PanelType.STAT, convert_stat_custom),
    "stat": PanelConversion(PanelType.STAT, convert_stat_custom),
    "bargauge": PanelConversion(PanelType.BAR_GAUGE, convert_bar_gauge_custom),
    "text": PanelConversion(PanelType.TEXT, convert_text_custom),
}

UNKNOWN_PANEL = PanelConversion(PanelType.UNKNOWN, convert_unknown_custom)


def dispatch_panel_type(foreign_type):
    """Return the internal type and custom converter for a foreign panel type."""
    if not isinstance(foreign_type, str):
        return UNKNOWN_PANEL
    return PANEL_TYPES.get(foreign_type, UNKNOWN_PANEL)


def rewrite_expression(expr):
    """Substitute the dynamic range macros of a query with a fixed window."""
    if not isinstance(expr, str):
        return expr
    for macro in RANGE_MACROS:
        expr = expr.replace(macro, RANGE_MACRO_WINDOW)
    return expr


def convert_targets(targets):
    """
    Convert the query targets of a panel, dropping hidden ones.

    Args:
        targets (list): Foreign targets, may be ``None``

    Returns:
        list: ``[{"refId", "expr", "legend"}]``
    """
    return [
        {
            "refId": target.get("refId"),
            "expr": rewrite_expression(target.get("expr")),
            "legend": target.get("legendFormat"),
        }
        for target in targets or []
        if isinstance(target, dict) and target.get("hide") is not True
    ]


def is_row(panel):
    return panel.get("type") == ROW_TYPE


def has_incomplete_targets(panel):
    """
    A terminal panel is dropped when any of its targets has no expression.

    A panel without targets is kept.
    """
    if is_row(panel):
        return False
    targets = panel.get("targets")
    if not targets:
        return False
    return not all(isinstance(target, dict) and target.get("expr") for target in targets)


def build_layout(panel, panel_id):
    layout = dict(get_field(panel, "gridPos", {}))
    layout["i"] = panel_id
    return layout


def convert_row(panel, id_factory):
    panel_id = id_factory()
    return {
        "version": SCHEMA_VERSION,
        "id": panel_id,
        "type": PanelType.ROW.value,
        "name": panel.get("title"),
        # Foreign "collapsed" hides the row, internal "collapsed" means expanded.
        "collapsed": not panel.get("collapsed"),
        "layout": build_layout(panel, panel_id),
        "panels": convert_panels(panel.get("panels"), id_factory),
    }


def convert_chart(panel, id_factory):
    conversion = dispatch_panel_type(panel.get("type"))
    if conversion is UNKNOWN_PANEL:
        logger.debug(f"Importing panel of unknown type {panel.get('type')!r}")

    panel_id = id_factory()
    return {
        "version": SCHEMA_VERSION,
        "id": panel_id,
        "type": conversion.type.value,
        "name": panel.get("title"),
        "description": panel.get("description"),
        "links": convert_links(panel.get("links")),
        "layout": build_layout(panel, panel_id),
        "targets": convert_targets(panel.get("targets")),
        "options": convert_options(panel),
        "custom": conversion.custom(panel),
    }


def convert_panels(panels, id_factory):
    """
    Convert a foreign panel list, recursing into row containers.

    Nesting and sibling order are preserved. Every output panel and row gets
    a fresh id from ``id_factory``.

    Args:
        panels (list): Foreign panels, may be ``None``
        id_factory (callable): Returns a new unique id on each call

    Returns:
        list: Internal panels
    """
    converted = []
    for panel in panels or []:
        if has_incomplete_targets(panel):
            logger.debug(
                f"Dropping panel {panel.get('title')!r}: a target has no expression"
            )
            continue
        if is_row(panel):
            converted.append(convert_row(panel, id_factory))
        else:
            converted.append(convert_chart(panel, id_factory))
    return converted
