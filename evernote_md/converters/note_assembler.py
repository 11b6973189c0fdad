#!/usr/bin/env python3
# Copyright (c) 2025 Denis Darkin
# SPDX-License-Identifier: MIT
"""
Assemble the final Markdown document: YAML header, separator, body.

Produced documents look like::

    ---
    title: 'Grocery List: 2024!'
    tags: [home]
    ---

    Milk
"""

import re
from typing import Any, Dict, Tuple

import yaml

from ..errors import SerializationError
from ..models import ConvertedNote, NoteMetadata

SEPARATOR = '---\n\n'

# Header block written by assemble_note
_HEADER_RE = re.compile(r"^---[ \t]*\n(.*?)\n---[ \t]*\n\n?", re.DOTALL)


def serialize_metadata(metadata: NoteMetadata) -> str:
    """Dump metadata as a YAML document with an explicit '---' start."""
    try:
        return yaml.safe_dump(
            metadata.to_dict(),
            explicit_start=True,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=None,
            width=float('inf'),
        )
    except yaml.YAMLError as e:
        raise SerializationError(metadata.title, f"metadata could not be serialized: {e}") from e


def assemble_note(metadata: NoteMetadata, body: str) -> str:
    """Concatenate header, separator and body.

    Raises:
        SerializationError: The metadata cannot be represented as YAML
    """
    return serialize_metadata(metadata) + SEPARATOR + body


def render_note(note: ConvertedNote) -> str:
    return assemble_note(note.metadata, note.body)


def parse_header(document: str) -> Tuple[Dict[str, Any], str]:
    """Split a document produced by assemble_note into ``(metadata, body)``.

    Returns an empty mapping and the whole text when no header is found.
    """
    match = _HEADER_RE.match(document)
    if not match:
        return {}, document
    meta = yaml.safe_load(match.group(1)) or {}
    return meta, document[match.end():]
