"""
Data access utilities for the dashboard importer.
"""

import gzip
import json
import os
from dashboard_importer.utils.logging import setup_logger
from dashboard_importer.utils.validation import DashboardValidationError

# Set up logger
logger = setup_logger(__name__)


def parse_dashboard_json(raw):
    """
    Parse a pasted or uploaded dashboard JSON blob.

    Args:
        raw (str | bytes): Raw JSON text

    Returns:
        The parsed document

    Raises:
        DashboardValidationError: If the blob is empty, not UTF-8 or not valid JSON
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DashboardValidationError(
                f"Dashboard JSON is not valid UTF-8 at byte {e.start}: {e.reason}"
            ) from e
    if not raw or not raw.strip():
        raise DashboardValidationError("Dashboard JSON is empty")

    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise DashboardValidationError(
            f"Invalid dashboard JSON at line {e.lineno} column {e.colno}: {e.msg}"
        ) from e


def _open_text(file_path, mode):
    if file_path.endswith(".gz"):
        return gzip.open(file_path, mode + "t", encoding="utf-8")
    return open(file_path, mode, encoding="utf-8")


def load_dashboards(file_path):
    """
    Load foreign dashboard documents from a ``.json`` or ``.json.gz`` file.

    A top-level array yields each of its entries; any other value is a
    single document.

    Args:
        file_path (str): Path to the export file

    Returns:
        list: Parsed documents

    Raises:
        DashboardValidationError: If the file does not contain valid UTF-8 JSON
    """
    opener = gzip.open if file_path.endswith(".gz") else open
    with opener(file_path, "rb") as f:
        document = parse_dashboard_json(f.read())

    if isinstance(document, list):
        logger.debug(f"Loaded {len(document)} dashboards from {file_path}")
        return document
    return [document]


def write_json_lines(file_path, records):
    """
    Write records as JSON lines, gzipped when the path ends with ``.gz``.

    Args:
        file_path (str): Destination path
        records (iterable): JSON-serializable records

    Returns:
        int: Number of records written
    """
    os.makedirs(os.path.dirname(file_path) or ".", exist_ok=True)
    count = 0
    with _open_text(file_path, "w") as f:
        for record in records:
            f.write(json.dumps(record, default=str) + "\n")
            count += 1
    return count


def read_json_lines(file_path):
    """
    Read records written by :func:`write_json_lines`.

    Args:
        file_path (str): Source path

    Returns:
        list: Parsed records
    """
    records = []
    if os.path.exists(file_path):
        with _open_text(file_path, "r") as f:
            for line in f:
                if line.strip():
                    records.append(json.loads(line))
    return records
