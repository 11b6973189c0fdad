#!/usr/bin/env python3
# Copyright (c) 2025 Denis Darkin
# SPDX-License-Identifier: MIT
"""
Evernote Extractors Module.

Provides the parser that turns an Evernote export (.enex) into
SourceNote objects.

Available extractors:
    - EnexParser: Parse ENEX export documents
    - parse_export: Convenience wrapper around EnexParser
"""

from .enex_parser import EnexParser, parse_export

__all__ = [
    "EnexParser",
    "parse_export",
]
