"""
Pytest configuration and fixtures for evernote2md tests.
"""
import threading
from typing import List, Sequence, Tuple

import pytest

from evernote_md.errors import EngineError


ENML_TEMPLATE = (
    '<?xml version="1.0" encoding="UTF-8" standalone="no"?>'
    '<!DOCTYPE en-note SYSTEM "http://xml.evernote.com/pub/enml2.dtd">'
    '<en-note>{body}</en-note>'
)


def make_enex(notes: Sequence[Tuple[str, str, List[str]]]) -> bytes:
    """Build an ENEX document from (title, html_body, tags) tuples."""
    parts = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<!DOCTYPE en-export SYSTEM "http://xml.evernote.com/pub/evernote-export3.dtd">',
        '<en-export export-date="20240101T120000Z" application="Evernote" version="10">',
    ]
    for title, body, tags in notes:
        parts.append('<note>')
        parts.append(f'<title>{title}</title>')
        parts.append(f'<content><![CDATA[{ENML_TEMPLATE.format(body=body)}]]></content>')
        parts.append('<created>20240101T120000Z</created>')
        parts.extend(f'<tag>{tag}</tag>' for tag in tags)
        parts.append('<note-attributes><author>John Doe</author></note-attributes>')
        parts.append('</note>')
    parts.append('</en-export>')
    return '\n'.join(parts).encode('utf-8')


class StubEngine:
    """Deterministic engine that drops <en-note> and <p> tags, failing on chosen markers."""

    name = 'fake'

    def __init__(self, fail_on: Sequence[str] = ()):
        self.fail_on = set(fail_on)
        self.calls = []
        self._lock = threading.Lock()

    def convert(self, html: str) -> str:
        with self._lock:
            self.calls.append(html)
        for marker in self.fail_on:
            if marker in html:
                raise EngineError(f"cannot convert {marker}")
        return html.replace('<en-note>', '').replace('</en-note>', '').replace('<p>', '').replace('</p>', '\n')


@pytest.fixture
def sample_enex() -> bytes:
    return make_enex([
        ("Grocery List: 2024!", "<p>Milk</p>", ["home"]),
        ("Meeting notes", "<h1>Agenda</h1><ul><li>Budget</li></ul>", ["work", "q1"]),
        ("Untagged", "<p>Nothing here</p>", []),
    ])


@pytest.fixture
def fake_engine():
    return StubEngine()
