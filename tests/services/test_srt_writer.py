"""Tests for SRT rendering."""

import pysubs2

from app.models.subtitle import SubtitleEntry
from app.services.srt_writer import export_filename, serialize_srt


class TestSerializeSrt:
    """Tests for serialize_srt function."""

    def test_two_entries(self):
        entries = [
            SubtitleEntry(id=10, start=0, end=1000, text="A"),
            SubtitleEntry(id=20, start=1000, end=2000, text="B"),
        ]
        assert serialize_srt(entries) == (
            "1\n00:00:00,000 --> 00:00:01,000\nA\n\n2\n00:00:01,000 --> 00:00:02,000\nB"
        )

    def test_empty_collection(self):
        assert serialize_srt([]) == ""

    def test_numbering_is_positional(self):
        entries = [
            SubtitleEntry(id=99999, start=0, end=1000, text="first"),
            SubtitleEntry(id=1, start=1000, end=2000, text="second"),
        ]
        output = serialize_srt(entries)
        assert output.startswith("1\n")
        assert "\n\n2\n" in output
        assert "99999" not in output

    def test_empty_text_block(self):
        output = serialize_srt([SubtitleEntry(id=1, start=0, end=1000, text="")])
        assert output == "1\n00:00:00,000 --> 00:00:01,000\n"

    def test_invalid_times_render_as_zero(self):
        output = serialize_srt([SubtitleEntry(id=1, start=-10, end=1000, text="x")])
        assert "00:00:00,000 --> 00:00:01,000" in output

    def test_output_readable_by_pysubs2(self):
        """Test the rendered file is accepted by a standard SRT reader."""
        entries = [
            SubtitleEntry(id=1, start=1000, end=4000, text="Hello world"),
            SubtitleEntry(id=2, start=5000, end=8000, text="How are you?"),
        ]
        subs = pysubs2.SSAFile.from_string(serialize_srt(entries), format_="srt")
        assert [(line.start, line.end, line.text) for line in subs] == [
            (1000, 4000, "Hello world"),
            (5000, 8000, "How are you?"),
        ]


class TestExportFilename:
    """Tests for export_filename function."""

    def test_replaces_extension(self):
        assert export_filename("interview.mp3") == "interview.srt"

    def test_only_last_extension_replaced(self):
        assert export_filename("talk.final.wav") == "talk.final.srt"

    def test_no_extension(self):
        assert export_filename("recording") == "recording.srt"

    def test_missing_name(self):
        assert export_filename(None) == "subtitles.srt"
        assert export_filename("") == "subtitles.srt"
