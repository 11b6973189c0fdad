#!/usr/bin/env python3
# Copyright (c) 2025 Denis Darkin
# SPDX-License-Identifier: MIT
"""
Data model shared by the parser, converters and the conversion pipeline.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class SourceNote:
    """A note as read from the export. Never mutated after parsing."""
    title: str
    content: str
    tags: Tuple[str, ...] = ()


@dataclass(frozen=True)
class NoteMetadata:
    """Header fields written at the top of each Markdown file."""
    title: str
    tags: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {'title': self.title, 'tags': list(self.tags)}


@dataclass(frozen=True)
class ConvertedNote:
    metadata: NoteMetadata
    body: str


@dataclass
class NoteOutcome:
    """Result from processing a single note."""
    title: str
    success: bool
    path: Optional[Path] = None
    stage: Optional[str] = None  # transform, assemble, write, cancelled or internal
    error: Optional[Exception] = None
    duration_seconds: float = 0.0


@dataclass
class ConversionReport:
    """Aggregated outcome of one conversion run."""
    total: int
    outcomes: List[NoteOutcome] = field(default_factory=list)
    # sanitized file name -> titles that resolved to it
    collisions: Dict[str, List[str]] = field(default_factory=dict)
    elapsed_seconds: float = 0.0

    @property
    def succeeded(self) -> List[NoteOutcome]:
        return [o for o in self.outcomes if o.success]

    @property
    def failed(self) -> List[NoteOutcome]:
        return [o for o in self.outcomes if not o.success]

    @property
    def ok(self) -> bool:
        """True only when every note was converted."""
        return len(self.succeeded) == self.total
