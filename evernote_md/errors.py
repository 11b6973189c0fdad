#!/usr/bin/env python3
# Copyright (c) 2025 Denis Darkin
# SPDX-License-Identifier: MIT
"""
Exception types raised by the conversion pipeline.

Setup errors (InputReadError, OutputDirectoryError, ParseError, ConfigError,
EngineError raised while building an engine) abort a run before any note is converted.
Note errors (TransformError, SerializationError, WriteError, RunCancelled)
are scoped to a single note and recorded in the run report.
"""

from typing import Optional


class Evernote2MdError(Exception):
    """Base class for all evernote2md errors."""


class ConfigError(Evernote2MdError):
    """Invalid configuration value."""


class InputReadError(Evernote2MdError):
    """The export file could not be read."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path} could not be read: {reason}")


class OutputDirectoryError(Evernote2MdError):
    """The output directory does not exist and cannot be created."""


class ParseError(Evernote2MdError):
    """The export document is malformed or misses required fields."""


class EngineError(Evernote2MdError):
    """A conversion engine failed or is unavailable."""


class NoteError(Evernote2MdError):
    """Failure confined to a single note."""

    stage: Optional[str] = None

    def __init__(self, title: str, message: str):
        self.title = title
        self.message = message
        super().__init__(f"[{self.stage}] {title!r}: {message}")


class TransformError(NoteError):
    stage = "transform"


class SerializationError(NoteError):
    stage = "assemble"


class WriteError(NoteError):
    stage = "write"


class RunCancelled(NoteError):
    """The note was never started because the run was cancelled or timed out."""

    stage = "cancelled"
