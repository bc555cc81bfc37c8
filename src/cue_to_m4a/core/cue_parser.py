"""CUE sheet metadata extraction"""
import re

from ..utils.encoding import decode_cue_bytes, DEFAULT_CUE_ENCODING

# Attribution target for TITLE/PERFORMER lines seen before any TRACK line.
# Any other target value is a track number.
ALBUM = "album"

_TRACK_NUMBER = re.compile(r'^[0-9]+$')


class TrackEntry:
    """Per-track fields read from a CUE sheet"""

    def __init__(self, title=None, performer=None):
        self.title = title
        self.performer = performer

    def __repr__(self):
        return f"TrackEntry(title={self.title!r}, performer={self.performer!r})"


class CueDocument:
    """Album-level fields plus a track number -> TrackEntry table"""

    def __init__(self):
        self.album_title = None
        self.album_performer = None
        self.album_date = None
        self.tracks = {}

    def assign(self, target, field, value):
        """
        Store a TITLE or PERFORMER value on the album or on a track.
        
        Args:
            target: ALBUM or a track number already present in `tracks`
            field: "title" or "performer"
            value: Extracted string value
        """
        if target == ALBUM:
            setattr(self, "album_" + field, value)
        else:
            setattr(self.tracks[target], field, value)


def _strip_quotes(value):
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


def _keyword_value(line, keyword):
    return _strip_quotes(line[len(keyword):].strip())


def _track_number(line):
    """Return the number of a TRACK line, or None if it is malformed"""
    parts = line.split()
    if len(parts) < 2 or not _TRACK_NUMBER.match(parts[1]):
        return None
    return int(parts[1])


def parse_cue_text(text):
    """
    Extract album and per-track metadata from decoded CUE text.
    
    TITLE and PERFORMER lines before the first valid TRACK line describe the
    album. After that they always belong to the most recent track, including
    lines that trail the last track.
    
    Args:
        text: Decoded CUE sheet contents
        
    Returns:
        CueDocument
    """
    document = CueDocument()
    target = ALBUM

    for raw_line in text.split("\n"):
        line = raw_line.strip()

        if line.startswith("TRACK"):
            number = _track_number(line)
            if number is not None:
                target = number
                document.tracks.setdefault(number, TrackEntry())
        elif line.startswith("TITLE"):
            document.assign(target, "title", _keyword_value(line, "TITLE"))
        elif line.startswith("PERFORMER"):
            document.assign(target, "performer", _keyword_value(line, "PERFORMER"))
        elif line.startswith("REM DATE"):
            document.album_date = line[len("REM DATE"):].strip()

    return document


def parse_cue(raw_data, encoding=DEFAULT_CUE_ENCODING, log_func=None):
    """Decode raw CUE bytes and parse them. Never fails on content."""
    return parse_cue_text(decode_cue_bytes(raw_data, encoding, log_func))


def read_cue_file(cue_path, encoding=DEFAULT_CUE_ENCODING, log_func=None):
    """
    Read and parse a CUE file from disk.
    
    Raises:
        OSError: if the file cannot be read
    """
    with open(cue_path, 'rb') as f:
        raw_data = f.read()
    return parse_cue(raw_data, encoding, log_func)
