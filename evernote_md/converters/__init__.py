#!/usr/bin/env python3
# Copyright (c) 2025 Denis Darkin
# SPDX-License-Identifier: MIT
"""
Evernote Converters Module.

Provides the pieces that turn a parsed note into a Markdown document.

Available converters:
    - ContentTransformer: ENML body -> Markdown through an engine
    - MarkdownifyEngine, PandocEngine, BasicEngine: conversion engines
    - assemble_note: YAML header + separator + body
    - markdown_utils: filename sanitization and markdown helpers
"""

from .content_transformer import ContentTransformer
from .engines import BasicEngine, ConversionEngine, MarkdownifyEngine, PandocEngine, create_engine
from .markdown_utils import sanitize_filename
from .note_assembler import assemble_note, parse_header, render_note

__all__ = [
    "ContentTransformer",
    "ConversionEngine",
    "MarkdownifyEngine",
    "PandocEngine",
    "BasicEngine",
    "create_engine",
    "sanitize_filename",
    "assemble_note",
    "parse_header",
    "render_note",
]
