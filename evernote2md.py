#!/usr/bin/env python3
# Copyright (c) 2025 Denis Darkin
# SPDX-License-Identifier: MIT
"""
evernote2md - Convert Evernote export files (.enex) to Markdown with YAML metadata

Usage:
    python evernote2md.py INPUT_FILE OUTPUT_DIR [options]

Examples:
    python evernote2md.py Notes.enex ./notes
    python evernote2md.py Notes.enex ./notes --engine pandoc
    python evernote2md.py Notes.enex ./notes --workers 8 --on-collision suffix

Exit codes:
    0  every note converted
    1  one or more notes failed (the others were still written)
    2  setup failure: unreadable input, malformed export, unusable
       output directory, engine or configuration
"""

import sys
import argparse
from pathlib import Path
from typing import List, Optional

from evernote_md.config import COLLISION_POLICIES, ENGINES, ConversionConfig, load_config_from_env
from evernote_md.conversion_pipeline import ConversionOrchestrator
from evernote_md.converters.content_transformer import ContentTransformer
from evernote_md.converters.engines import ConversionEngine, create_engine
from evernote_md.errors import ConfigError, EngineError, Evernote2MdError
from evernote_md.extractors.enex_parser import parse_export
from evernote_md.models import ConversionReport
from evernote_md.pipeline_base import (
    setup_logging,
    read_export,
    prepare_output_dir,
    log_pipeline_start,
    log_conversion_summary
)

EXIT_OK = 0
EXIT_NOTES_FAILED = 1
EXIT_SETUP_FAILED = 2


def check_requirements(config: ConversionConfig) -> Optional[ConversionEngine]:
    """Build the configured engine, or print why it cannot run and return None."""
    try:
        engine = create_engine(config.engine, pandoc_timeout=config.pandoc_timeout)
    except (ConfigError, EngineError) as e:
        print(f"ERROR: {config.engine} engine unavailable")
        print(f"   Details: {e}")
        if config.engine == 'pandoc':
            print("   Install pandoc (https://pandoc.org) or use --engine markdownify")
        return None

    print(f"OK: {engine.name} engine available")
    return engine


def run_conversion(input_path: Path, output_dir: Path, config: ConversionConfig,
                   engine: ConversionEngine, logger) -> ConversionReport:
    """Run the complete conversion.

    Args:
        input_path: Path of the .enex export
        output_dir: Directory receiving one Markdown file per note
        config: Validated run configuration
        engine: Conversion engine shared by all workers
        logger: Logger for progress messages

    Returns:
        ConversionReport for the run

    Raises:
        OutputDirectoryError, InputReadError, ParseError: setup failures,
        raised before any note is converted
    """
    output_dir = prepare_output_dir(output_dir)
    log_pipeline_start(logger, input_path, output_dir, engine.name, config.workers)

    data = read_export(input_path)
    notes = parse_export(data)
    logger.info(f"Found {len(notes)} note(s) to convert")

    orchestrator = ConversionOrchestrator(ContentTransformer(engine), config)
    report = orchestrator.run(notes, output_dir)

    log_conversion_summary(logger, report)
    return report


def build_config(args: argparse.Namespace) -> ConversionConfig:
    """Environment values first, command line flags override them."""
    config = load_config_from_env()
    if args.engine is not None:
        config.engine = args.engine
    if args.workers is not None:
        config.workers = args.workers
    if args.on_collision is not None:
        config.on_collision = args.on_collision
    if args.timeout is not None:
        config.timeout_seconds = args.timeout
    return config.validate()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="evernote2md",
        description="Converts Evernote export files (.enex) to Markdown with YAML metadata",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    evernote2md Notes.enex ./notes
    evernote2md Notes.enex ./notes --engine pandoc
    evernote2md Notes.enex ./notes --on-collision suffix
    evernote2md Notes.enex ./notes --log-dir ./logs --verbose

Environment:
    EVERNOTE2MD_WORKERS, EVERNOTE2MD_ENGINE, EVERNOTE2MD_ON_COLLISION,
    EVERNOTE2MD_TIMEOUT, EVERNOTE2MD_PANDOC_TIMEOUT
        """
    )

    parser.add_argument('input_file', type=Path, help='Evernote export file (.enex)')
    parser.add_argument('output_dir', type=Path, help='Output directory (created if absent)')

    parser.add_argument(
        '--engine',
        choices=ENGINES,
        help='HTML to Markdown engine (default: markdownify)'
    )

    parser.add_argument(
        '--workers',
        type=int,
        help='Number of notes converted in parallel (default: CPU count)'
    )

    parser.add_argument(
        '--on-collision',
        choices=COLLISION_POLICIES,
        help='What to do when two titles map to the same file name (default: overwrite)'
    )

    parser.add_argument(
        '--timeout',
        type=float,
        help='Overall deadline in seconds; notes not started by then are skipped'
    )

    parser.add_argument(
        '--log-dir',
        type=Path,
        help='Also write a timestamped log file to this directory'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log debug messages'
    )

    parser.add_argument(
        '--check-only',
        action='store_true',
        help='Only check that the engine can run, do not convert'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logger = setup_logging(args.log_dir, 'Evernote2md', args.verbose)

    try:
        config = build_config(args)
    except ConfigError as e:
        logger.error(str(e))
        print(f"ERROR: {e}")
        return EXIT_SETUP_FAILED

    engine = check_requirements(config)
    if engine is None:
        return EXIT_SETUP_FAILED

    if args.check_only:
        print("Requirements check passed. Ready to convert.")
        return EXIT_OK

    try:
        report = run_conversion(args.input_file, args.output_dir, config, engine, logger)
    except Evernote2MdError as e:
        logger.error(str(e))
        print(f"\nERROR: {e}")
        return EXIT_SETUP_FAILED

    if report.ok:
        print("\n" + "=" * 60)
        print("SUCCESS: Conversion complete!")
        print("=" * 60)
        print(f"\nMarkdown files written to:\n  {args.output_dir}")
        return EXIT_OK

    print("\n" + "=" * 60)
    print(f"FAILED: {len(report.failed)} note(s) could not be converted, see errors above")
    print("=" * 60)
    return EXIT_NOTES_FAILED


if __name__ == '__main__':
    sys.exit(main())
