"""
Logging utilities for the dashboard importer.
"""

import json
import logging
import os
import time
from datetime import datetime
from functools import wraps

from dashboard_importer.config import LOG_FILE, LOG_LEVEL


# Configure logging
def setup_logger(name):
    """
    Set up a logger with the specified name.

    Args:
        name (str): Logger name

    Returns:
        logging.Logger: Configured logger
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

        os.makedirs(os.path.dirname(LOG_FILE), exist_ok=True)

        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

        # File handler
        file_handler = logging.FileHandler(LOG_FILE)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        # Console handler
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


logger = setup_logger(__name__)


def log_processing_stats(source_name, stats):
    """
    Log import statistics for one source file.

    Args:
        source_name (str): Name of the imported file
        stats (dict): Statistics dictionary
    """
    logger.info(f"Import completed for {source_name}:")
    logger.info(f"  - Dashboards processed: {stats.get('processed', 0)}")
    logger.info(f"  - Dashboards converted: {stats.get('valid', 0)}")
    logger.info(f"  - Dashboards quarantined: {stats.get('invalid', 0)}")

    if "panels_imported" in stats:
        logger.info(f"  - Panels imported: {stats.get('panels_imported', 0)}")
        logger.info(f"  - Panels dropped: {stats.get('panels_dropped', 0)}")
        logger.info(f"  - Panels of unknown type: {stats.get('panels_unknown', 0)}")

    logger.info(f"  - Processing time: {stats.get('processing_time', 0):.2f}s")


def log_execution_time(func):
    """
    Decorator to log the execution time of a function.

    Args:
        func (callable): Function to decorate

    Returns:
        callable: Decorated function
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        logger.debug(f"Starting {func.__name__}")

        try:
            result = func(*args, **kwargs)
            execution_time = time.time() - start_time
            logger.debug(f"Completed {func.__name__} in {execution_time:.2f}s")
            return result
        except Exception as e:
            execution_time = time.time() - start_time
            logger.error(
                f"Error in {func.__name__} after {execution_time:.2f}s: {str(e)}"
            )
            raise

    return wrapper


def log_error(error_type, message, details=None):
    """
    Log an error with structured details.

    Args:
        error_type (str): Type of error
        message (str): Error message
        details (dict, optional): Additional error details

    Returns:
        dict: The structured error record
    """
    error_data = {
        "timestamp": datetime.now().isoformat(),
        "error_type": error_type,
        "message": message,
    }

    if details:
        error_data["details"] = details

    logger.error(f"Error: {error_type} - {message}")

    if details:
        logger.debug(f"Error details: {json.dumps(details, default=str)}")

    return error_data


def log_validation_error(source, index, errors):
    """
    Log a dashboard that failed structural validation.

    Args:
        source (str): Source file name
        index (int): Position of the document in the source file
        errors (list): List of validation errors
    """
    return log_error(
        error_type="ValidationError",
        message=f"Validation failed for dashboard #{index} in {source}",
        details={"source": source, "index": index, "errors": errors},
    )
