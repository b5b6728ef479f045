"""
Тесты журнала заметок лида
"""

from datetime import datetime

from modules.crm.leads.models import NoteEntry
from modules.crm.leads.notes import format_notes, parse_notes, prepend_note


class TestParseNotes:
    def test_empty(self):
        assert parse_notes(None) == []
        assert parse_notes("   ") == []

    def test_plain_text_without_header(self):
        entries = parse_notes("Tertarik paket Ramadhan")
        assert entries == [NoteEntry(text="Tertarik paket Ramadhan")]

    def test_entries_with_headers(self):
        raw = "[17/10/2026 10:30 | Siti] Sudah ditelepon\n\n[01/10/2026 09:00] Minta brosur"
        entries = parse_notes(raw)

        assert len(entries) == 2
        assert entries[0].timestamp == datetime(2026, 10, 17, 10, 30)
        assert entries[0].author == "Siti"
        assert entries[0].text == "Sudah ditelepon"
        assert entries[1].author is None
        assert entries[1].text == "Minta brosur"

    def test_multiline_entry(self):
        entries = parse_notes("[17/10/2026 10:30] baris satu\nbaris dua")
        assert entries[0].text == "baris satu\nbaris dua"

    def test_invalid_timestamp_kept_as_text(self):
        entries = parse_notes("[99/99/2026 10:30] aneh")
        assert entries[0].timestamp is None
        assert entries[0].text == "[99/99/2026 10:30] aneh"


class TestFormatNotes:
    def test_empty_log(self):
        assert format_notes([]) is None

    def test_format_parse_keeps_entries(self):
        entries = [
            NoteEntry(text="Sudah ditelepon", timestamp=datetime(2026, 10, 17, 10, 30), author="Siti"),
            NoteEntry(text="Catatan lama"),
        ]
        assert parse_notes(format_notes(entries)) == entries


class TestPrependNote:
    def test_new_entry_first(self):
        old = [NoteEntry(text="lama", timestamp=datetime(2026, 10, 1, 9, 0))]
        result = prepend_note(old, "  baru  ", datetime(2026, 10, 17, 10, 30, 45, 123))

        assert [entry.text for entry in result] == ["baru", "lama"]
        assert result[0].timestamp == datetime(2026, 10, 17, 10, 30)
        assert len(old) == 1
