"""
Batch import orchestration module.
"""

import argparse
import json
import os
from datetime import datetime

from dashboard_importer.config import INPUT_PATH, OUTPUT_PATH
from dashboard_importer.metrics import (import_errors, import_files_processed,
                                        push_metrics)
from dashboard_importer.processors.dashboards import process_dashboards
from dashboard_importer.utils.logging import log_execution_time, setup_logger

# Set up logger
logger = setup_logger(__name__)

EXPORT_SUFFIXES = (".json", ".json.gz")


def scan_for_dashboards(base_path):
    """
    Scan a directory for dashboard export files.

    Args:
        base_path (str): Directory holding ``.json`` / ``.json.gz`` exports

    Returns:
        list: Sorted file paths
    """
    if not os.path.exists(base_path):
        logger.warning(f"Path does not exist: {base_path}")
        return []

    files = []
    for name in sorted(os.listdir(base_path)):
        file_path = os.path.join(base_path, name)
        if os.path.isfile(file_path) and name.endswith(EXPORT_SUFFIXES):
            files.append(file_path)
            logger.info(f"Found dashboard export: {file_path}")
    return files


def generate_stats(file_stats, output_path=None):
    """
    Aggregate and persist the statistics of one batch.

    Args:
        file_stats (dict): Per-file statistics keyed by file path
        output_path (str, optional): Override the output directory

    Returns:
        dict: Aggregated statistics
    """
    stats = {
        "timestamp": datetime.now().isoformat(),
        "files_processed": sorted(file_stats),
        "total_dashboards": 0,
        "converted_dashboards": 0,
        "invalid_dashboards": 0,
        "panels_imported": 0,
        "panels_dropped": 0,
        "panels_unknown": 0,
    }

    for file_stat in file_stats.values():
        stats["total_dashboards"] += file_stat.get("processed", 0)
        stats["converted_dashboards"] += file_stat.get("valid", 0)
        stats["invalid_dashboards"] += file_stat.get("invalid", 0)
        stats["panels_imported"] += file_stat.get("panels_imported", 0)
        stats["panels_dropped"] += file_stat.get("panels_dropped", 0)
        stats["panels_unknown"] += file_stat.get("panels_unknown", 0)

    logger.info("Import summary:")
    logger.info(f"  - Files processed: {len(stats['files_processed'])}")
    logger.info(f"  - Total dashboards: {stats['total_dashboards']}")
    logger.info(f"  - Converted dashboards: {stats['converted_dashboards']}")
    logger.info(f"  - Invalid dashboards: {stats['invalid_dashboards']}")
    logger.info(f"  - Panels imported: {stats['panels_imported']}")
    logger.info(f"  - Panels dropped: {stats['panels_dropped']}")

    stats_dir = os.path.join(output_path or OUTPUT_PATH, "stats")
    os.makedirs(stats_dir, exist_ok=True)

    stats_file = os.path.join(
        stats_dir, f"stats_{datetime.now().strftime('%Y%m%dT%H%M%S')}.json"
    )
    with open(stats_file, "w") as f:
        json.dump(stats, f, indent=2)

    return stats


@log_execution_time
def process_dashboard_batch(base_path=INPUT_PATH, output_path=None):
    """
    Import every dashboard export found in a directory.

    A file that fails is counted as an error and the batch moves on.

    Args:
        base_path (str): Directory holding the exports
        output_path (str, optional): Override the output directory

    Returns:
        dict: Aggregated statistics
    """
    logger.info(f"Processing dashboard exports from {base_path}")

    file_stats = {}
    for export_file in scan_for_dashboards(base_path):
        try:
            file_stats[export_file] = process_dashboards(
                export_file, output_path=output_path, push=False
            )
        except Exception as e:
            logger.error(f"Failed to import dashboards from {export_file}: {e}")
            import_errors.inc()
        finally:
            import_files_processed.inc()

    if not file_stats:
        logger.warning(f"No dashboard exports imported from {base_path}")

    return generate_stats(file_stats, output_path=output_path)


def is_metrics_push_disabled(args=None):
    disabled = os.getenv("DISABLE_METRICS_PUSH", "0") == "1"
    if args is None:
        return disabled
    return (
        disabled
        or getattr(args, "ci_mode", False)
        or getattr(args, "disable_metrics_push", False)
    )


def run_pipeline(input_path=None, output_path=None, push=True):
    """
    Run one import batch and optionally push its metrics.

    Args:
        input_path (str, optional): Directory holding the exports
        output_path (str, optional): Override the output directory
        push (bool): Push batch metrics to the Pushgateway

    Returns:
        dict: Aggregated statistics
    """
    stats = process_dashboard_batch(input_path or INPUT_PATH, output_path=output_path)
    if push:
        push_metrics(job_name="dashboard_import")
    return stats


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Import foreign dashboard exports into the internal schema"
    )
    parser.add_argument("--input-path", help="Directory holding dashboard exports")
    parser.add_argument("--output-path", help="Directory for converted dashboards")
    parser.add_argument(
        "--ci-mode", action="store_true", help="Run without pushing metrics"
    )
    parser.add_argument(
        "--disable-metrics-push",
        action="store_true",
        help="Disable Prometheus metrics push",
    )

    args = parser.parse_args(argv)
    push = not is_metrics_push_disabled(args)
    if args.ci_mode:
        logger.info("Running in CI mode, disabling metrics push")

    return run_pipeline(args.input_path, args.output_path, push=push)


if __name__ == "__main__":
    main()
