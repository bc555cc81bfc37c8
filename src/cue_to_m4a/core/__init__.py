"""Core functionality modules"""

from .cue_parser import CueDocument, TrackEntry, parse_cue, read_cue_file
from .metadata import ResolvedTrackMetadata, resolve_track, sanitize_filename
from .stages import ShntoolSplitter, QaacTranscoder, cleanup_album
from .pipeline import PipelineState, AlbumContext, PipelineOrchestrator, convert_album

__all__ = [
    "CueDocument",
    "TrackEntry",
    "parse_cue",
    "read_cue_file",
    "ResolvedTrackMetadata",
    "resolve_track",
    "sanitize_filename",
    "ShntoolSplitter",
    "QaacTranscoder",
    "cleanup_album",
    "PipelineState",
    "AlbumContext",
    "PipelineOrchestrator",
    "convert_album",
]
