#!/usr/bin/env python3
# Copyright (c) 2025 Denis Darkin
# SPDX-License-Identifier: MIT
"""
Parallel note conversion.

Notes are fanned out over a ThreadPoolExecutor. Each worker runs one
note through transform -> assemble -> write; a failure in any stage is
recorded for that note and never stops its siblings.
"""

import logging
import os
import tempfile
import threading
import time
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .config import ConversionConfig
from .converters.content_transformer import ContentTransformer
from .converters.markdown_utils import sanitize_filename
from .converters.note_assembler import render_note
from .errors import NoteError, RunCancelled, WriteError
from .models import ConversionReport, ConvertedNote, NoteMetadata, NoteOutcome, SourceNote

logger = logging.getLogger(__name__)


def _current_umask() -> int:
    # os.umask can only be read by setting it, so call this before workers start
    mask = os.umask(0)
    os.umask(mask)
    return mask


def _discard(tmp_name: Optional[str]):
    if tmp_name is not None:
        Path(tmp_name).unlink(missing_ok=True)


def write_atomic(path: Path, text: str, title: str, umask: Optional[int] = None):
    """Write ``text`` to a temp file next to ``path`` and rename it into place.

    The file gets the mode of the file it replaces, or ``0o666 & ~umask``
    for a new file, as a plain ``open(path, 'w')`` would.

    Raises:
        WriteError: Any filesystem failure; the temp file is removed
    """
    if umask is None:
        umask = _current_umask()
    try:
        mode = path.stat().st_mode & 0o7777
    except OSError:
        mode = 0o666 & ~umask

    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            mode='w', encoding='utf-8', newline='', dir=path.parent,
            prefix=f'.{path.stem[:50]}.', suffix='.tmp', delete=False
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(text)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except OSError as e:
        _discard(tmp_name)
        raise WriteError(title, f"could not write {path}: {e}") from e
    except BaseException:
        _discard(tmp_name)
        raise


class ConversionOrchestrator:
    """
    Convert a note collection into Markdown files concurrently.

    Args:
        transformer: Content transformer wrapping the conversion engine
        config: Run configuration (workers, collision policy, deadline, naming)
        progress_callback: Optional callback(status, completed, total); an
                           exception it raises is logged, not propagated
        cancel_event: Optional event; once set, notes not yet started are
                      reported as cancelled
    """

    def __init__(
        self,
        transformer: ContentTransformer,
        config: Optional[ConversionConfig] = None,
        progress_callback: Optional[Callable[[str, int, int], None]] = None,
        cancel_event: Optional[threading.Event] = None
    ):
        self.transformer = transformer
        self.config = (config or ConversionConfig()).validate()
        self.progress_callback = progress_callback
        self.cancel_event = cancel_event or threading.Event()

    def plan_targets(self, notes: Sequence[SourceNote],
                     output_dir: Path) -> Tuple[List[Path], Dict[str, List[str]]]:
        """
        Resolve every note's output path before any worker starts.

        Returns:
            (paths, collisions): one path per note in input order, and the
            file names claimed by more than one title
        """
        cfg = self.config
        names = [
            sanitize_filename(note.title, cfg.extension, cfg.fallback_name, cfg.max_name_bytes)
            for note in notes
        ]

        claimed = defaultdict(list)
        for note, name in zip(notes, names):
            claimed[name].append(note.title)
        collisions = {name: titles for name, titles in claimed.items() if len(titles) > 1}

        if cfg.on_collision == 'suffix' and collisions:
            names = self._disambiguate(names)

        return [output_dir / name for name in names], collisions

    def _disambiguate(self, names: List[str]) -> List[str]:
        """Append -2, -3, ... to repeated names, first occurrence keeps its name."""
        ext = self.config.extension
        taken = set(names)
        seen = set()
        result = []
        for name in names:
            if name in seen:
                stem = name[:-len(ext)]
                counter = 2
                while f"{stem}-{counter}{ext}" in taken:
                    counter += 1
                name = f"{stem}-{counter}{ext}"
                taken.add(name)
            seen.add(name)
            result.append(name)
        return result

    def run(self, notes: Sequence[SourceNote], output_dir: Path) -> ConversionReport:
        """
        Convert all notes and write them under ``output_dir``.

        Args:
            notes: Parsed notes, shared read-only by all workers
            output_dir: Existing output directory

        Returns:
            ConversionReport with one outcome per note, in input order
        """
        output_dir = Path(output_dir)
        report = ConversionReport(total=len(notes))
        if not notes:
            return report

        targets, report.collisions = self.plan_targets(notes, output_dir)
        for name, titles in report.collisions.items():
            if self.config.on_collision == 'overwrite':
                logger.warning(f"{len(titles)} notes sanitize to {name}; the last one written wins")
            else:
                logger.info(f"{len(titles)} notes sanitize to {name}; numeric suffixes added")

        deadline = None
        if self.config.timeout_seconds is not None:
            deadline = time.monotonic() + self.config.timeout_seconds

        logger.debug(f"Converting {len(notes)} notes with {self.config.workers} workers")
        umask = _current_umask()

        start_time = time.time()
        outcomes: List[Optional[NoteOutcome]] = [None] * len(notes)
        completed_count = 0

        with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
            future_to_index = {
                executor.submit(self._convert_one, note, target, deadline, umask): i
                for i, (note, target) in enumerate(zip(notes, targets))
            }

            # Collect results as they complete
            for future in as_completed(future_to_index):
                index = future_to_index[future]
                completed_count += 1
                try:
                    outcome = future.result()
                except Exception as e:
                    # Anything that escaped the per-stage handling
                    outcome = NoteOutcome(title=notes[index].title, success=False,
                                          path=targets[index], stage='internal', error=e)
                    logger.exception(f"Unexpected error converting {notes[index].title!r}")
                outcomes[index] = outcome

                if self.progress_callback:
                    try:
                        self.progress_callback(
                            "success" if outcome.success else "failed",
                            completed_count,
                            len(notes)
                        )
                    except Exception:
                        logger.exception("Progress callback failed")

        report.outcomes = outcomes
        report.elapsed_seconds = time.time() - start_time
        return report

    def _convert_one(self, note: SourceNote, target: Path,
                     deadline: Optional[float], umask: int) -> NoteOutcome:
        """Run a single note through the pipeline. Never raises NoteError."""
        start = time.time()

        if self.cancel_event.is_set() or (deadline is not None and time.monotonic() >= deadline):
            error = RunCancelled(note.title, "run cancelled before the note was started")
            logger.warning(f"Skipped {note.title!r}: {error.message}")
            return NoteOutcome(title=note.title, success=False, path=target,
                               stage=error.stage, error=error)

        try:
            body = self.transformer.transform(note)
            converted = ConvertedNote(
                metadata=NoteMetadata(title=note.title, tags=note.tags),
                body=body,
            )
            document = render_note(converted)

            logger.info(f"Writing {note.title!r} to {target}")
            write_atomic(target, document, note.title, umask)

        except NoteError as e:
            logger.error(f"Failed [{e.stage}] {note.title!r}: {e.message}")
            return NoteOutcome(title=note.title, success=False, path=target,
                               stage=e.stage, error=e, duration_seconds=time.time() - start)

        return NoteOutcome(title=note.title, success=True, path=target,
                           duration_seconds=time.time() - start)


def convert_notes(notes: Sequence[SourceNote], output_dir: Path,
                  transformer: ContentTransformer,
                  config: Optional[ConversionConfig] = None) -> ConversionReport:
    """Convenience wrapper: build an orchestrator and run it once."""
    return ConversionOrchestrator(transformer, config).run(notes, output_dir)
