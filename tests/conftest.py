"""Shared fixtures"""

import pytest

ALBUM_CUE = """\
REM DATE 2004
PERFORMER "Band"
TITLE "Album"
FILE "Album.flac" WAVE
  TRACK 01 AUDIO
    TITLE "Song A"
    INDEX 01 00:00:00
  TRACK 02 AUDIO
    TITLE "Song: B?"
    INDEX 01 04:00:00
  TRACK 03 AUDIO
    TITLE "曲C"
    PERFORMER "Guest"
    INDEX 01 08:00:00
"""


@pytest.fixture
def album_dir(tmp_path):
    """Album directory with Album.cue/.flac/.jpg/.png"""
    album = tmp_path / "Album"
    album.mkdir()
    (album / "Album.cue").write_bytes(ALBUM_CUE.encode("cp932"))
    (album / "Album.flac").write_bytes(b"fLaC")
    (album / "Album.jpg").write_bytes(b"jpg")
    (album / "Album.png").write_bytes(b"png")
    return album
