#!/usr/bin/env python3
# Copyright (c) 2025 Denis Darkin
# SPDX-License-Identifier: MIT
"""Configuration for conversion runs.

Values come from defaults, then environment variables, then command line
flags (see evernote2md.py), each layer overriding the previous one.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from .errors import ConfigError

ENGINES = ('markdownify', 'pandoc', 'basic')
COLLISION_POLICIES = ('overwrite', 'suffix')


def _default_workers() -> int:
    return os.cpu_count() or 4


@dataclass
class ConversionConfig:
    """Settings for one conversion run.

    Attributes:
        workers: Number of worker threads converting notes concurrently
        engine: Conversion engine name ('markdownify', 'pandoc' or 'basic')
        on_collision: 'overwrite' keeps last-writer-wins semantics when two
                      titles sanitize to the same name, 'suffix' appends -2, -3, ...
        timeout_seconds: Overall run deadline; notes not started by then are
                         reported as cancelled. None disables the deadline.
        extension: File extension of produced documents
        fallback_name: Base name used when a title sanitizes to nothing
        max_name_bytes: Upper bound on the UTF-8 length of a base name
        pandoc_timeout: Per-note timeout for the pandoc engine, in seconds
    """

    workers: int = field(default_factory=_default_workers)
    engine: str = 'markdownify'
    on_collision: str = 'overwrite'
    timeout_seconds: Optional[float] = None
    extension: str = '.md'
    fallback_name: str = 'untitled'
    max_name_bytes: int = 200
    pandoc_timeout: float = 60.0

    def validate(self) -> 'ConversionConfig':
        """Raise ConfigError on the first invalid field, return self otherwise."""
        if self.workers < 1:
            raise ConfigError(f"workers must be at least 1, got {self.workers}")
        if self.engine not in ENGINES:
            raise ConfigError(f"unknown engine {self.engine!r} (choose from {', '.join(ENGINES)})")
        if self.on_collision not in COLLISION_POLICIES:
            raise ConfigError(
                f"unknown collision policy {self.on_collision!r} "
                f"(choose from {', '.join(COLLISION_POLICIES)})"
            )
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout_seconds}")
        if not self.extension.startswith('.'):
            raise ConfigError(f"extension must start with '.', got {self.extension!r}")
        if not self.fallback_name:
            raise ConfigError("fallback_name must not be empty")
        if self.max_name_bytes < 1:
            raise ConfigError(f"max_name_bytes must be at least 1, got {self.max_name_bytes}")
        if self.pandoc_timeout <= 0:
            raise ConfigError(f"pandoc_timeout must be positive, got {self.pandoc_timeout}")
        return self


def load_config_from_env() -> ConversionConfig:
    """Load configuration from environment variables.

    Environment variables:
        EVERNOTE2MD_WORKERS: Worker thread count (default: CPU count)
        EVERNOTE2MD_ENGINE: Conversion engine (default: markdownify)
        EVERNOTE2MD_ON_COLLISION: overwrite or suffix (default: overwrite)
        EVERNOTE2MD_TIMEOUT: Overall run deadline in seconds (default: none)
        EVERNOTE2MD_PANDOC_TIMEOUT: Per-note pandoc timeout (default: 60)

    Malformed numbers fall back to the default value.

    Returns:
        ConversionConfig: Configuration with values from the environment
    """

    def str_to_int(value: Optional[str], default: int) -> int:
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default

    def str_to_float(value: Optional[str], default: Optional[float]) -> Optional[float]:
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            return default

    defaults = ConversionConfig()

    return ConversionConfig(
        workers=str_to_int(os.getenv('EVERNOTE2MD_WORKERS'), defaults.workers),
        engine=os.getenv('EVERNOTE2MD_ENGINE', defaults.engine),
        on_collision=os.getenv('EVERNOTE2MD_ON_COLLISION', defaults.on_collision),
        timeout_seconds=str_to_float(os.getenv('EVERNOTE2MD_TIMEOUT'), defaults.timeout_seconds),
        pandoc_timeout=str_to_float(os.getenv('EVERNOTE2MD_PANDOC_TIMEOUT'), defaults.pandoc_timeout),
    )
