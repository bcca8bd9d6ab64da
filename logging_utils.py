"""
Logging Utilities for the Report Extraction Engine

Provides centralized logging configuration for extraction runs and a helper
that records exceptions with their traceback and context.
"""

import logging
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple


def setup_run_logging(log_dir: str, source_label: str, console_level: int = logging.WARNING) -> Tuple[logging.Logger, str]:
    """
    Set up file-based logging for an extraction run.
    Configures the ROOT logger so module loggers inherit the file handler.

    Args:
        log_dir: Directory where the run log is written
        source_label: Name of the report being processed, for context
        console_level: Minimum level echoed to stderr

    Returns:
        Tuple of (run_logger instance, log_file_path)
    """
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    log_filename = f"extraction_log_{timestamp}.log"
    log_file_path = str(Path(log_dir) / log_filename)

    Path(log_dir).mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Clear existing handlers to avoid duplicates
    root_logger.handlers.clear()

    file_handler = logging.FileHandler(log_file_path, mode='w', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    root_logger.addHandler(file_handler)

    # stdout carries the JSON draft, so the console handler writes to stderr
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    root_logger.addHandler(console_handler)

    run_logger = logging.getLogger('extraction_run')
    run_logger.setLevel(logging.DEBUG)

    run_logger.info("=" * 70)
    run_logger.info("Report Extraction - Run Log")
    run_logger.info(f"Source: {source_label}")
    run_logger.info(f"Log File: {log_filename}")
    run_logger.info(f"Started: {datetime.now().isoformat()}")
    run_logger.info("=" * 70)

    return run_logger, log_file_path


def log_exception(logger: logging.Logger, exc: Exception, context: str = "",
                  source: Optional[str] = None, **kwargs) -> None:
    """
    Log a full exception with traceback and context information.

    Args:
        logger: Logger instance to use
        exc: Exception that was raised
        context: Additional context string
        source: Report source label for context
        **kwargs: Additional context key-value pairs
    """
    error_msg = f"Exception occurred: {type(exc).__name__}: {str(exc)}"
    if context:
        error_msg = f"{context} - {error_msg}"

    logger.error(error_msg)
    logger.error(f"Traceback:\n{traceback.format_exc()}")

    if source:
        logger.error(f"Source: {source}")

    if kwargs:
        logger.error(f"Context: {kwargs}")
