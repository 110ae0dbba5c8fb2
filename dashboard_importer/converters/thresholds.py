"""
Threshold conversion.
"""

from dashboard_importer.converters.palette import resolve_color
from dashboard_importer.converters.fields import get_field

# The only rendering style the internal schema supports.
THRESHOLD_STYLE = "line"


def convert_threshold_step(step, index):
    """
    Convert one foreign threshold step.

    Args:
        step (dict): Foreign step with ``value`` and ``color``
        index (int): Position of the step in the foreign list

    Returns:
        dict: Internal step; ``type`` is present only on the base step
    """
    converted = {key: value for key, value in step.items() if key != "type"}
    converted["color"] = resolve_color(step.get("color"))
    # A step only counts as the base step when it states an explicit null value.
    if index == 0 and "value" in step and step["value"] is None:
        converted["type"] = "base"
    return converted


def convert_thresholds(defaults):
    """
    Convert the thresholds of a foreign ``fieldConfig.defaults`` block.

    Foreign style metadata is discarded; ``mode`` is carried through even
    though the renderer ignores it for now.

    Args:
        defaults (dict): Foreign field-config defaults

    Returns:
        dict: ``{"mode", "style", "steps"}``
    """
    steps = get_field(defaults, "thresholds.steps", [])
    return {
        "mode": get_field(defaults, "thresholds.mode"),
        "style": THRESHOLD_STYLE,
        "steps": [
            convert_threshold_step(step, index)
            for index, step in enumerate(steps)
            if isinstance(step, dict)
        ],
    }
