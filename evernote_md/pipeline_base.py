#!/usr/bin/env python3
# Copyright (c) 2025 Denis Darkin
# SPDX-License-Identifier: MIT
"""
Shared utilities for the ENEX to Markdown conversion pipeline.
Logging setup, input reading, output directory preparation and reporting.
"""

import sys
import logging
from pathlib import Path
from datetime import datetime
from typing import Optional

from .errors import InputReadError, OutputDirectoryError
from .models import ConversionReport


def setup_logging(log_dir: Optional[Path], logger_name: str, verbose: bool = False) -> logging.Logger:
    """
    Set up logging configuration with UTF-8 encoding.

    Args:
        log_dir: Directory for the log file, or None to log to stdout only
        logger_name: Name for the logger (e.g., 'Evernote2md')
        verbose: Log DEBUG messages when True

    Returns:
        Configured logger instance
    """
    handlers = [logging.StreamHandler(sys.stdout)]

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        log_file = log_dir / f'{logger_name.lower()}_{timestamp}.log'
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )
    logger = logging.getLogger(logger_name)

    # Set console output encoding to UTF-8 for Windows
    if (sys.stdout.encoding or '').lower().replace('-', '') != 'utf8':
        try:
            sys.stdout.reconfigure(encoding='utf-8')
            sys.stderr.reconfigure(encoding='utf-8')
        except (AttributeError, OSError, ValueError) as e:
            logger.debug(f"Console output left as {sys.stdout.encoding}: {e}")

    return logger


def read_export(input_path: Path) -> bytes:
    """
    Read the whole export file into memory.

    Raises:
        InputReadError: If the file is missing or unreadable
    """
    try:
        return Path(input_path).read_bytes()
    except OSError as e:
        raise InputReadError(input_path, e.strerror or str(e)) from e


def prepare_output_dir(output_dir: Path) -> Path:
    """
    Create the output directory if needed and return its absolute path.

    Raises:
        OutputDirectoryError: If the path exists as a file or cannot be created
    """
    output_dir = Path(output_dir)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputDirectoryError(f"Could not create directory {output_dir}: {e}") from e
    return output_dir.resolve()


def log_pipeline_start(logger: logging.Logger, input_path: Path, output_dir: Path,
                       engine: str, workers: int):
    """Log the start of a conversion run."""
    logger.info("evernote2md - ENEX to Markdown")
    logger.info("=" * 70)
    logger.info(f"Input: {input_path}")
    logger.info(f"Output Directory: {output_dir}")
    logger.info(f"Engine: {engine}, workers: {workers}")


def log_conversion_summary(logger: logging.Logger, report: ConversionReport):
    """
    Log the final conversion summary and print it for the operator.

    Args:
        logger: Logger instance
        report: Outcome of the run
    """
    succeeded = len(report.succeeded)
    failed = report.failed

    logger.info("=" * 70)
    logger.info(f"Processing complete: {succeeded}/{report.total} notes converted "
                f"in {report.elapsed_seconds:.1f}s")

    if report.collisions:
        logger.info(f"{len(report.collisions)} file name(s) were shared by several notes")

    for outcome in failed:
        logger.error(f"Failed [{outcome.stage}] {outcome.title!r}: {outcome.error}")

    if report.ok:
        print(f"\nSuccessfully converted {succeeded} note(s)")
    else:
        print(f"\nConverted {succeeded} of {report.total} note(s), {len(failed)} failed")
