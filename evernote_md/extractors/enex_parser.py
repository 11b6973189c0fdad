#!/usr/bin/env python3
# Copyright (c) 2025 Denis Darkin
# SPDX-License-Identifier: MIT
"""
ENEX Parser - Parse Evernote export documents into SourceNote objects
Only title, content and tags are read; every other element is ignored
"""

import logging
import xml.etree.ElementTree as ET
from typing import List

from ..errors import ParseError
from ..models import SourceNote


class EnexParser:
    """Parse an Evernote export (.enex) held in memory."""

    ROOT_TAG = 'en-export'

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def parse(self, data: bytes) -> List[SourceNote]:
        """Parse raw export bytes into notes, preserving export order.

        Args:
            data: Complete content of the export file

        Returns:
            List of SourceNote, one per <note> element

        Raises:
            ParseError: If the bytes are not well-formed XML or a note
                        lacks its <title> or <content> element
        """
        try:
            root = ET.fromstring(data)
        except ET.ParseError as e:
            raise ParseError(f"Invalid XML in export: {e}") from e

        if root.tag != self.ROOT_TAG:
            self.logger.warning(f"Unexpected root element <{root.tag}>, expected <{self.ROOT_TAG}>")

        notes = [
            self._parse_note(note_elem, index)
            for index, note_elem in enumerate(root.findall('note'), start=1)
        ]

        if not notes:
            self.logger.warning("Export contains no notes")

        return notes

    def _parse_note(self, note_elem: ET.Element, index: int) -> SourceNote:
        title_elem = note_elem.find('title')
        if title_elem is None:
            raise ParseError(f"Note #{index} has no <title> element")

        title = title_elem.text or ''

        content_elem = note_elem.find('content')
        if content_elem is None:
            raise ParseError(f"Note #{index} ({title!r}) has no <content> element")

        # Tags are repeated <tag> siblings; blank ones carry no information
        tags = tuple(
            tag.text.strip()
            for tag in note_elem.findall('tag')
            if tag.text and tag.text.strip()
        )

        return SourceNote(title=title, content=content_elem.text or '', tags=tags)


def parse_export(data: bytes) -> List[SourceNote]:
    """Parse export bytes with a fresh EnexParser."""
    return EnexParser().parse(data)
