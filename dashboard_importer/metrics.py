# dashboard_importer/metrics.py

import logging

from prometheus_client import CollectorRegistry, Counter, Histogram, push_to_gateway

from dashboard_importer.config import PROMETHEUS_PUSHGATEWAY

# Custom registry for pushgateway
pushgateway_registry = CollectorRegistry()


logger = logging.getLogger(__name__)

# ===================
# Generic Import Metrics
# ===================
import_errors = Counter(
    "dashboard_import_errors_total",
    "Total dashboard import errors",
    registry=pushgateway_registry,
)
import_files_processed = Counter(
    "dashboard_import_files_processed_total",
    "Number of source files processed",
    registry=pushgateway_registry,
)

# ====================
# Dashboard Metrics
# ====================
DASHBOARDS_PROCESSED_COUNTER = Counter(
    "dashboards_processed_total",
    "Total foreign dashboard documents processed",
    registry=pushgateway_registry,
)
DASHBOARDS_CONVERTED_COUNTER = Counter(
    "dashboards_converted_total",
    "Total dashboards converted to the internal schema",
    registry=pushgateway_registry,
)
DASHBOARDS_INVALID_COUNTER = Counter(
    "dashboards_invalid_total",
    "Total dashboards quarantined as structurally invalid",
    registry=pushgateway_registry,
)
DASHBOARD_CONVERSION_DURATION = Histogram(
    "dashboard_conversion_duration_seconds",
    "Dashboard file conversion duration in seconds",
    registry=pushgateway_registry,
)

# ====================
# Panel Metrics
# ====================
PANELS_IMPORTED_COUNTER = Counter(
    "panels_imported_total",
    "Total terminal panels written to converted dashboards",
    registry=pushgateway_registry,
)
PANELS_DROPPED_COUNTER = Counter(
    "panels_dropped_total",
    "Total terminal panels dropped for targets without an expression",
    registry=pushgateway_registry,
)
PANELS_UNKNOWN_COUNTER = Counter(
    "panels_unknown_type_total",
    "Total panels imported with an unrecognized foreign type",
    registry=pushgateway_registry,
)
VARIABLES_SKIPPED_COUNTER = Counter(
    "variables_skipped_total",
    "Total template variables of an unsupported kind",
    registry=pushgateway_registry,
)


# ====================
# Push Helpers
# ====================
def push_metrics(job_name="dashboard_import", registry=pushgateway_registry):
    try:
        push_to_gateway(PROMETHEUS_PUSHGATEWAY, job=job_name, registry=registry)
        logger.info("Metrics pushed to Prometheus Pushgateway")
    except Exception as e:
        logger.warning(f"Failed to push metrics: {e}")
