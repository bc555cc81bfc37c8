"""External tool adapters and cleanup for the conversion pipeline"""
import os

from ..utils.helpers import run_command

# shntool names its outputs split-track01.flac, split-track02.flac, ...
SPLIT_PREFIX = "split-track"
SPLIT_FORMAT = "flac"
MAX_TRACKS = 99


def split_track_path(album_dir, track_number):
    """Path of the intermediate file shntool writes for a track"""
    return os.path.join(album_dir, f"{SPLIT_PREFIX}{track_number:02d}.{SPLIT_FORMAT}")


def probe_split_tracks(album_dir):
    """
    Yield (track_number, path) for contiguous split files starting at 1.
    
    Stops at the first missing number and never goes past MAX_TRACKS, so a
    track following a gap in the numbering is never seen.
    """
    for track_number in range(1, MAX_TRACKS + 1):
        path = split_track_path(album_dir, track_number)
        if not os.path.exists(path):
            break
        yield track_number, path


class ShntoolSplitter:
    """Splits an audio image into per-track FLAC files with shntool"""

    def __init__(self, logfile, executable="shntool"):
        self.logfile = logfile
        self.executable = executable

    def build_command(self, cue_path, image_path):
        return [self.executable, "split", "-f", cue_path, "-o", SPLIT_FORMAT, image_path]

    def split(self, cue_path, image_path):
        """
        Run the split in the current working directory.
        
        Returns:
            True if shntool exited with status 0
        """
        exit_code = run_command(self.build_command(cue_path, image_path), self.logfile)
        return exit_code == 0


class QaacTranscoder:
    """Encodes one split track to tagged AAC with qaac"""

    def __init__(self, logfile, executable="qaac64"):
        self.logfile = logfile
        self.executable = executable

    def build_command(self, input_path, output_path, artwork_path, metadata):
        return [
            self.executable,
            "--no-optimize",
            "--tvbr", "91",
            "--verbose",
            "--artwork", artwork_path,
            "--title", metadata.title,
            "--artist", metadata.performer,
            "--album", metadata.album,
            "--date", metadata.date,
            "--track", str(metadata.track_number),
            input_path,
            "-o", output_path,
        ]

    def transcode(self, input_path, output_path, artwork_path, metadata):
        """Returns True if qaac exited with status 0"""
        cmd = self.build_command(input_path, output_path, artwork_path, metadata)
        return run_command(cmd, self.logfile) == 0


def _remove_file(path, log):
    try:
        os.remove(path)
    except OSError as e:
        log(f"  ❌ Failed to delete {os.path.basename(path)}: {e}")
        return False
    log(f"  🗑️ Deleted {os.path.basename(path)}")
    return True


def cleanup_album(source_paths, album_dir, log):
    """
    Delete source files and split intermediates.
    
    Every existing path in `source_paths` is removed, then every existing
    split-trackNN file for NN in 1..MAX_TRACKS. A failed deletion is logged
    and does not stop the others.
    
    Args:
        source_paths: Image, CUE and artwork paths
        album_dir: Directory holding the split files
        log: Function to call for logging messages
        
    Returns:
        Tuple of (deleted paths, paths that could not be deleted)
    """
    deleted = []
    failed = []

    candidates = list(source_paths)
    candidates.extend(
        split_track_path(album_dir, n) for n in range(1, MAX_TRACKS + 1)
    )

    for path in candidates:
        if not os.path.exists(path):
            continue
        if _remove_file(path, log):
            deleted.append(path)
        else:
            failed.append(path)

    return deleted, failed
