"""
Configuration settings for the dashboard importer.
"""

import os
from pathlib import Path

# Base paths
BASE_DIR = Path(__file__).resolve().parent.parent
INPUT_PATH = os.environ.get("INPUT_PATH", os.path.join(BASE_DIR, "data", "input"))
OUTPUT_PATH = os.environ.get("OUTPUT_PATH", os.path.join(BASE_DIR, "data", "output"))
QUARANTINE_PATH = os.environ.get(
    "QUARANTINE_PATH", os.path.join(BASE_DIR, "data", "quarantine")
)

# Ensure directories exist
for path in [INPUT_PATH, OUTPUT_PATH, QUARANTINE_PATH]:
    os.makedirs(path, exist_ok=True)


# Logging configuration
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.environ.get("LOG_FILE", os.path.join(BASE_DIR, "logs", "importer.log"))
os.makedirs(os.path.dirname(LOG_FILE), exist_ok=True)

# Metrics configuration
METRICS_ENABLED = os.environ.get("METRICS_ENABLED", "True").lower() == "true"
DISABLE_METRICS_PUSH = (
    os.environ.get("DISABLE_METRICS_PUSH", "0") == "1" or not METRICS_ENABLED
)

# Prometheus Pushgateway URL
raw_gateway = os.environ.get("PROMETHEUS_PUSHGATEWAY", "pushgateway:9091")

# Ensure the URL includes scheme
if not raw_gateway.startswith("http://") and not raw_gateway.startswith("https://"):
    raw_gateway = f"http://{raw_gateway}"

PROMETHEUS_PUSHGATEWAY = raw_gateway
