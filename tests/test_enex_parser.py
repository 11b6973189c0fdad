"""Unit tests for the ENEX parser."""

import pytest

from evernote_md.errors import ParseError
from evernote_md.extractors import EnexParser, parse_export
from evernote_md.models import SourceNote

from conftest import make_enex


class TestParseExport:
    def test_notes_in_export_order(self, sample_enex):
        notes = parse_export(sample_enex)
        assert [n.title for n in notes] == ["Grocery List: 2024!", "Meeting notes", "Untagged"]

    def test_note_count_matches(self):
        data = make_enex([(f"Note {i}", f"<p>{i}</p>", []) for i in range(25)])
        assert len(parse_export(data)) == 25

    def test_tags_preserved_in_order(self, sample_enex):
        notes = parse_export(sample_enex)
        assert notes[0].tags == ("home",)
        assert notes[1].tags == ("work", "q1")

    def test_note_without_tags_is_valid(self, sample_enex):
        assert parse_export(sample_enex)[2].tags == ()

    def test_content_is_raw_enml(self, sample_enex):
        content = parse_export(sample_enex)[0].content
        assert content.startswith('<?xml')
        assert '<en-note><p>Milk</p></en-note>' in content

    def test_unknown_elements_ignored(self, sample_enex):
        note = parse_export(sample_enex)[0]
        assert "John Doe" not in note.content
        assert "20240101T120000Z" not in note.content

    def test_deterministic(self, sample_enex):
        assert parse_export(sample_enex) == parse_export(sample_enex)

    def test_empty_export(self):
        data = b'<?xml version="1.0"?><en-export></en-export>'
        assert parse_export(data) == []

    def test_empty_content_element(self):
        data = b'<en-export><note><title>Blank</title><content/></note></en-export>'
        assert parse_export(data) == [SourceNote(title="Blank", content="", tags=())]

    def test_blank_tags_dropped(self):
        data = (b'<en-export><note><title>T</title><content>x</content>'
                b'<tag> a </tag><tag></tag><tag>   </tag></note></en-export>')
        assert parse_export(data)[0].tags == ("a",)


class TestParseErrors:
    def test_malformed_xml(self):
        with pytest.raises(ParseError, match="Invalid XML"):
            parse_export(b"<en-export><note><title>x</title>")

    def test_not_xml_at_all(self):
        with pytest.raises(ParseError):
            parse_export(b"\x00\x01 definitely not xml")

    def test_missing_title(self):
        data = b'<en-export><note><content>x</content></note></en-export>'
        with pytest.raises(ParseError, match="no <title>"):
            parse_export(data)

    def test_missing_content(self):
        data = b'<en-export><note><title>Lonely</title></note></en-export>'
        with pytest.raises(ParseError, match="Lonely"):
            parse_export(data)


def test_unexpected_root_still_parses(caplog):
    data = b'<export><note><title>T</title><content>x</content></note></export>'
    notes = EnexParser().parse(data)
    assert len(notes) == 1
    assert "Unexpected root element" in caplog.text
