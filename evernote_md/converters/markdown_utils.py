#!/usr/bin/env python3
# Copyright (c) 2025 Denis Darkin
# SPDX-License-Identifier: MIT
"""
Shared utilities for markdown conversion and filename sanitization.

The regular expressions below are compiled once at import time and shared,
read-only, by every worker thread.
"""

import re
import html
from typing import List, Optional, Tuple

# Characters that never make it into a file name
_PUNCTUATION_RE = re.compile(r"""[\s:;\[\]{}<>=@#$%^&*.,?!'"|()/\\•-]""")
_REPEATED_DASH_RE = re.compile(r'-{2,}')

# ENML bodies arrive wrapped in an XML declaration and a DOCTYPE
_XML_DECLARATION_RE = re.compile(r'^\s*<\?xml[^>]*\?>\s*', re.IGNORECASE)
_DOCTYPE_RE = re.compile(r'<!DOCTYPE[^>]*>\s*', re.IGNORECASE)

_BLANK_LINES_RE = re.compile(r'\n\s*\n')


def sanitize_filename(title: str, extension: str = '.md', fallback: str = 'untitled',
                      max_bytes: int = 200) -> str:
    """Map a note title to a file name usable as a single path segment.

    Args:
        title: Note title, any string
        extension: Extension appended to the base name
        fallback: Base name used when nothing survives sanitization
        max_bytes: Maximum UTF-8 length of the base name

    Returns:
        Sanitized file name, e.g. 'Grocery-List-2024.md'

    Examples:
        >>> sanitize_filename("Grocery List: 2024!")
        'Grocery-List-2024.md'

        >>> sanitize_filename("A/B")
        'A-B.md'

        >>> sanitize_filename("?!")
        'untitled.md'
    """
    base = _PUNCTUATION_RE.sub('-', title)
    base = _REPEATED_DASH_RE.sub('-', base)
    base = base.strip('-')

    encoded = base.encode('utf-8')
    if len(encoded) > max_bytes:
        # Cut at a character boundary, then drop any dash left dangling
        base = encoded[:max_bytes].decode('utf-8', errors='ignore').rstrip('-')

    if not base:
        base = fallback

    return f"{base}{extension}"


def strip_enml_envelope(content: str) -> str:
    """Remove the XML declaration and DOCTYPE that precede an ENML body."""
    content = _XML_DECLARATION_RE.sub('', content)
    return _DOCTYPE_RE.sub('', content)


def normalize_blank_lines(text: str) -> str:
    """Collapse runs of blank lines and trim trailing spaces."""
    lines = [line.rstrip() for line in text.splitlines()]
    return _BLANK_LINES_RE.sub('\n\n', '\n'.join(lines)).strip()


def _tag(names: str, open_attrs: str = r'(?:\s[^>]*)?') -> str:
    return rf'<(?:{names}){open_attrs}>(.*?)</(?:{names})>'


# Order matters: links and inline formatting before the final tag strip
_BASIC_RULES: List[Tuple[re.Pattern, Optional[str]]] = [
    (re.compile(_tag('strong|b|u'), re.DOTALL | re.IGNORECASE), r'**\1**'),
    (re.compile(r"""<span\s+style=["']font-weight:\s*bold[^>]*>(.*?)</span>""", re.DOTALL | re.IGNORECASE), r'**\1**'),
    (re.compile(_tag('em|i'), re.DOTALL | re.IGNORECASE), r'*\1*'),
    (re.compile(r"""<span\s+style=["']font-style:\s*italic[^>]*>(.*?)</span>""", re.DOTALL | re.IGNORECASE), r'*\1*'),
    (re.compile(_tag('s|strike|del'), re.DOTALL | re.IGNORECASE), r'~~\1~~'),
    (re.compile(_tag('code|tt'), re.DOTALL | re.IGNORECASE), r'`\1`'),
    (re.compile(r'<h([1-6])[^>]*>(.*?)</h\1>', re.DOTALL | re.IGNORECASE), None),
    (re.compile(r"""<a\s+[^>]*href=["']([^"']+)["'][^>]*>(.*?)</a>""", re.DOTALL | re.IGNORECASE), r'[\2](\1)'),
    (re.compile(r'<li(?:\s[^>]*)?>', re.IGNORECASE), '\n- '),
    (re.compile(r'<br\s*/?>', re.IGNORECASE), '\n'),
    (re.compile(r'</(?:p|div|ul|ol|h[1-6]|blockquote|pre|table|tr)>', re.IGNORECASE), '\n\n'),
    (re.compile(r'<[^>]+>'), ''),
]


def _heading(match: re.Match) -> str:
    return '\n\n' + '#' * int(match.group(1)) + ' ' + match.group(2).strip() + '\n\n'


def html_to_markdown(html_text: str) -> str:
    """Convert HTML to markdown with regular expressions only.

    Handles bold, italic, underline (as bold), strikethrough, inline code,
    headings, links, list items and line breaks. All other tags are
    stripped but their text is kept. Entities are decoded after the
    tag strip.
    """
    text = html_text
    for pattern, replacement in _BASIC_RULES:
        text = pattern.sub(replacement if replacement is not None else _heading, text)
    text = html.unescape(text)
    return normalize_blank_lines(text)
