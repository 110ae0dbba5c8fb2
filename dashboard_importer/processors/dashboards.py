"""
Dashboard import processor module.
"""

import json
import os
import time as pytime

from dashboard_importer.config import (DISABLE_METRICS_PUSH, OUTPUT_PATH,
                                       QUARANTINE_PATH)
from dashboard_importer.converters.dashboard import convert_dashboard
from dashboard_importer.converters.panels import PanelType, is_row
from dashboard_importer.converters.variables import is_supported_variable
from dashboard_importer.metrics import (DASHBOARD_CONVERSION_DURATION,
                                        DASHBOARDS_CONVERTED_COUNTER,
                                        DASHBOARDS_INVALID_COUNTER,
                                        DASHBOARDS_PROCESSED_COUNTER,
                                        PANELS_DROPPED_COUNTER,
                                        PANELS_IMPORTED_COUNTER,
                                        PANELS_UNKNOWN_COUNTER,
                                        VARIABLES_SKIPPED_COUNTER,
                                        import_errors, push_metrics)
from dashboard_importer.converters.fields import get_field
from dashboard_importer.utils.data_access import load_dashboards, write_json_lines
from dashboard_importer.utils.logging import (log_processing_stats,
                                              log_validation_error,
                                              setup_logger)
from dashboard_importer.utils.validation import (DashboardValidationError,
                                                 validate_dashboard)

logger = setup_logger(__name__)


def push_metrics_to_gateway():
    push_metrics(job_name="dashboard_import_processing")


def source_stem(input_file):
    name = os.path.basename(input_file)
    for suffix in (".json.gz", ".json"):
        if name.endswith(suffix):
            return name[: -len(suffix)]
    return name


def iter_terminal_panels(panels):
    """Yield every non-row panel of a panel tree, depth first."""
    for panel in panels or []:
        if not isinstance(panel, dict):
            continue
        if is_row(panel):
            yield from iter_terminal_panels(panel.get("panels"))
        else:
            yield panel


def summarize_panels(document, converted):
    """
    Compare a foreign document with its conversion.

    Args:
        document (dict): Foreign dashboard
        converted (dict): Internal dashboard produced from it

    Returns:
        dict: ``imported``, ``dropped``, ``unknown`` panel counts and
        ``variables_skipped``
    """
    foreign_panels = list(iter_terminal_panels(document.get("panels")))
    internal_panels = list(iter_terminal_panels(converted["configs"]["panels"]))
    variables = get_field(document, "templating.list", [])
    return {
        "imported": len(internal_panels),
        "dropped": len(foreign_panels) - len(internal_panels),
        "unknown": sum(
            1 for panel in internal_panels if panel["type"] == PanelType.UNKNOWN.value
        ),
        "variables_skipped": sum(
            1 for variable in variables if not is_supported_variable(variable)
        ),
    }


def process_dashboards(input_file, output_path=None, quarantine_path=None, push=None):
    """
    Convert every foreign dashboard found in an export file.

    Args:
        input_file (str): Path to a ``.json`` or ``.json.gz`` export
        output_path (str, optional): Override the output directory
        quarantine_path (str, optional): Override the quarantine directory
        push (bool, optional): Push metrics after the file; defaults to
            the DISABLE_METRICS_PUSH setting

    Returns:
        dict: Processing statistics
    """
    logger.info(f"Importing dashboards from {input_file}")
    start_time = pytime.time()

    output_dir = output_path or OUTPUT_PATH
    quarantine_dir = quarantine_path or QUARANTINE_PATH
    os.makedirs(output_dir, exist_ok=True)
    os.makedirs(quarantine_dir, exist_ok=True)

    stem = source_stem(input_file)
    stats = {
        "processed": 0,
        "valid": 0,
        "invalid": 0,
        "panels_imported": 0,
        "panels_dropped": 0,
        "panels_unknown": 0,
        "variables_skipped": 0,
        "processing_time": 0,
    }

    converted_dashboards = []
    invalid_dashboards = []

    with DASHBOARD_CONVERSION_DURATION.time():
        try:
            documents = load_dashboards(input_file)
        except DashboardValidationError as e:
            logger.error(f"Unreadable dashboard export {input_file}: {e}")
            documents = []
            stats["processed"] += 1
            stats["invalid"] += 1
            DASHBOARDS_PROCESSED_COUNTER.inc()
            DASHBOARDS_INVALID_COUNTER.inc()
            invalid_dashboards.append({"_source_file": input_file, "_errors": e.errors})

        for index, document in enumerate(documents):
            stats["processed"] += 1
            DASHBOARDS_PROCESSED_COUNTER.inc()

            validation_errors = validate_dashboard(document)
            if validation_errors:
                log_validation_error(input_file, index, validation_errors)
                if not isinstance(document, dict):
                    document = {"_document": document}
                invalid_dashboards.append({**document, "_errors": validation_errors})
                stats["invalid"] += 1
                DASHBOARDS_INVALID_COUNTER.inc()
                continue

            try:
                converted = convert_dashboard(document)
            except (AttributeError, TypeError, ValueError) as e:
                logger.error(f"Error converting dashboard #{index} in {input_file}: {e}")
                invalid_dashboards.append({**document, "_errors": [str(e)]})
                stats["invalid"] += 1
                DASHBOARDS_INVALID_COUNTER.inc()
                import_errors.inc()
                continue

            summary = summarize_panels(document, converted)
            stats["panels_imported"] += summary["imported"]
            stats["panels_dropped"] += summary["dropped"]
            stats["panels_unknown"] += summary["unknown"]
            stats["variables_skipped"] += summary["variables_skipped"]
            PANELS_IMPORTED_COUNTER.inc(summary["imported"])
            PANELS_DROPPED_COUNTER.inc(summary["dropped"])
            PANELS_UNKNOWN_COUNTER.inc(summary["unknown"])
            VARIABLES_SKIPPED_COUNTER.inc(summary["variables_skipped"])

            converted_dashboards.append(converted)
            stats["valid"] += 1
            DASHBOARDS_CONVERTED_COUNTER.inc()
            logger.info(
                f"Converted dashboard {converted['name']!r} "
                f"({summary['imported']} panels, {summary['dropped']} dropped)"
            )

        output_file = os.path.join(output_dir, f"{stem}_converted.json.gz")
        write_json_lines(output_file, converted_dashboards)

        if invalid_dashboards:
            quarantine_file = os.path.join(quarantine_dir, f"{stem}_invalid.json.gz")
            logger.warning(
                f"{len(invalid_dashboards)} invalid dashboards moved to {quarantine_file}"
            )
            write_json_lines(quarantine_file, invalid_dashboards)

    stats["processing_time"] = pytime.time() - start_time

    if push is None:
        push = not DISABLE_METRICS_PUSH
    if push:
        push_metrics_to_gateway()

    log_processing_stats(os.path.basename(input_file), stats)

    stats_file = os.path.join(output_dir, f"{stem}_stats.json")
    with open(stats_file, "w") as f:
        json.dump(stats, f, indent=2)

    return stats
