"""Per-track tag resolution and output naming"""
from collections import namedtuple

UNKNOWN = "unknown"
UNKNOWN_ALBUM = "unknown album"
OUTPUT_EXTENSION = "m4a"

_RESERVED_CHARS = '/\\:*?"<>|'
_SANITIZE_TABLE = str.maketrans({c: "_" for c in _RESERVED_CHARS})


ResolvedTrackMetadata = namedtuple(
    "ResolvedTrackMetadata", ["track_number", "title", "performer", "album", "date"]
)


def resolve_track(track_number, document):
    """
    Merge a track's CUE fields with album-level fallbacks.
    
    Args:
        track_number: 1-based track number
        document: CueDocument from the parser
        
    Returns:
        ResolvedTrackMetadata with every field filled in
    """
    entry = document.tracks.get(track_number)
    title = entry.title if entry is not None else None
    performer = entry.performer if entry is not None else None

    return ResolvedTrackMetadata(
        track_number=track_number,
        title=title if title is not None else UNKNOWN,
        performer=next(
            (p for p in (performer, document.album_performer) if p is not None), UNKNOWN
        ),
        album=document.album_title if document.album_title is not None else UNKNOWN_ALBUM,
        date=document.album_date if document.album_date is not None else UNKNOWN,
    )


def sanitize_filename(name):
    """Replace characters that are reserved in file names with underscores"""
    return name.translate(_SANITIZE_TABLE)


def output_filename(metadata):
    """Build the "NN_title.m4a" name for a resolved track"""
    return f"{metadata.track_number:02d}_{sanitize_filename(metadata.title)}.{OUTPUT_EXTENSION}"
