#!/usr/bin/env python3
# Copyright (c) 2025 Denis Darkin
# SPDX-License-Identifier: MIT
"""
Transform a note's ENML body into Markdown through a conversion engine
"""

from ..errors import EngineError, TransformError
from ..models import SourceNote
from .engines import ConversionEngine
from .markdown_utils import strip_enml_envelope


class ContentTransformer:
    """Wrap a conversion engine and attribute its failures to a note."""

    def __init__(self, engine: ConversionEngine):
        self.engine = engine

    def transform(self, note: SourceNote) -> str:
        """Convert the body of ``note`` to Markdown.

        Raises:
            TransformError: The engine rejected the body; carries the note title
        """
        html = strip_enml_envelope(note.content)
        try:
            return self.engine.convert(html)
        except EngineError as e:
            raise TransformError(note.title, str(e)) from e
