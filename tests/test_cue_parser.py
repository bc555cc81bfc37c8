"""Tests for CUE sheet metadata extraction"""
import pytest

from cue_to_m4a.core.cue_parser import parse_cue, parse_cue_text, read_cue_file


SAMPLE_CUE = """\
REM GENRE Pop
REM DATE 2001
PERFORMER "Album Artist"
TITLE "Album"
FILE "Album.flac" WAVE
  TRACK 01 AUDIO
    TITLE "Song A"
    PERFORMER "Guest"
    INDEX 01 00:00:00
  TRACK 02 AUDIO
    TITLE "Song B"
    INDEX 01 03:12:40
"""


class TestParseCueText:
    """Line-by-line attribution of CUE fields"""

    def test_album_and_track_fields(self):
        doc = parse_cue_text(SAMPLE_CUE)
        assert doc.album_title == "Album"
        assert doc.album_performer == "Album Artist"
        assert doc.album_date == "2001"
        assert sorted(doc.tracks) == [1, 2]
        assert doc.tracks[1].title == "Song A"
        assert doc.tracks[1].performer == "Guest"
        assert doc.tracks[2].title == "Song B"
        assert doc.tracks[2].performer is None

    def test_fields_before_first_track_are_album_level(self):
        doc = parse_cue_text('TITLE "Album"\nPERFORMER "Band"\n')
        assert doc.album_title == "Album"
        assert doc.album_performer == "Band"
        assert doc.tracks == {}

    def test_track_entry_created_without_fields(self):
        doc = parse_cue_text('TITLE "Album"\nTRACK 01 AUDIO\nTITLE "Song A"\nTRACK 02 AUDIO\n')
        assert doc.tracks[2].title is None
        assert doc.tracks[2].performer is None

    def test_trailing_fields_attach_to_last_track(self):
        text = 'TRACK 01 AUDIO\nTITLE "Song"\nTRACK 02 AUDIO\nTITLE "Other"\nPERFORMER "Late Global"\n'
        doc = parse_cue_text(text)
        assert doc.album_performer is None
        assert doc.tracks[2].performer == "Late Global"

    @pytest.mark.parametrize("line", ["TRACK", "TRACK AUDIO", "TRACK -1 AUDIO", "TRACK x1"])
    def test_malformed_track_line_is_ignored(self, line):
        text = f'TRACK 03 AUDIO\n{line}\nTITLE "Still Three"\n'
        doc = parse_cue_text(text)
        assert sorted(doc.tracks) == [3]
        assert doc.tracks[3].title == "Still Three"

    def test_malformed_track_before_any_track_keeps_album_target(self):
        doc = parse_cue_text('TRACK\nTITLE "Album"\n')
        assert doc.album_title == "Album"
        assert doc.tracks == {}

    def test_last_write_wins(self):
        doc = parse_cue_text('TRACK 1\nTITLE "First"\nTITLE "Second"\n')
        assert doc.tracks[1].title == "Second"

    def test_repeated_track_keeps_existing_entry(self):
        doc = parse_cue_text('TRACK 1\nTITLE "Kept"\nTRACK 2\nTRACK 1\nPERFORMER "P"\n')
        assert doc.tracks[1].title == "Kept"
        assert doc.tracks[1].performer == "P"

    def test_only_one_pair_of_quotes_is_stripped(self):
        doc = parse_cue_text('TITLE ""Quoted""\nPERFORMER "Open\n')
        assert doc.album_title == '"Quoted"'
        assert doc.album_performer == '"Open'

    def test_unquoted_value_and_whitespace(self):
        doc = parse_cue_text('   TITLE    Bare Title   \r\n')
        assert doc.album_title == "Bare Title"

    def test_date_is_kept_verbatim(self):
        doc = parse_cue_text('REM DATE "1999/01/02"\n')
        assert doc.album_date == '"1999/01/02"'

    def test_unknown_lines_are_ignored(self):
        doc = parse_cue_text('REM COMMENT "x"\nCATALOG 123\nFILE "a.flac" WAVE\n\n')
        assert doc.album_title is None
        assert doc.album_performer is None
        assert doc.album_date is None
        assert doc.tracks == {}


class TestParseCueBytes:
    """Decoding of raw CUE bytes"""

    def test_decodes_shift_jis(self):
        raw = 'TITLE "アルバム"\nTRACK 01 AUDIO\nTITLE "曲"\n'.encode("cp932")
        doc = parse_cue(raw)
        assert doc.album_title == "アルバム"
        assert doc.tracks[1].title == "曲"

    def test_undecodable_bytes_are_replaced(self):
        doc = parse_cue(b'TITLE "A\x82')
        assert "�" in doc.album_title

    def test_utf8_bom_overrides_default(self):
        raw = b'\xef\xbb\xbf' + 'TITLE "Café"\n'.encode("utf-8")
        doc = parse_cue(raw)
        assert doc.album_title == "Café"

    def test_read_cue_file(self, tmp_path):
        cue = tmp_path / "album.cue"
        cue.write_bytes(SAMPLE_CUE.encode("cp932"))
        doc = read_cue_file(str(cue))
        assert doc.album_title == "Album"

    def test_read_missing_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            read_cue_file(str(tmp_path / "missing.cue"))
