#!/usr/bin/env python3
# Copyright (c) 2025 Denis Darkin
# SPDX-License-Identifier: MIT
"""
evernote2md - Convert Evernote exports (.enex) to Markdown.

Each note becomes one Markdown file with a YAML header holding its
title and tags. Notes are converted concurrently.

Modules:
    - extractors: ENEX parsing
    - converters: Markdown conversion, engines, document assembly
    - conversion_pipeline: Parallel conversion and file writing
    - pipeline_base: Logging, input/output helpers, reporting
    - config: Run configuration
    - errors: Exception types
"""

__version__ = "1.0.0"
__author__ = "Denis Darkin"
__license__ = "MIT"

__all__ = [
    "extractors",
    "converters",
    "conversion_pipeline",
    "pipeline_base",
    "config",
    "errors",
    "models",
]
