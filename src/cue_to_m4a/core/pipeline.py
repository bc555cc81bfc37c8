"""Album conversion pipeline: validate, split, transcode each track, clean up"""
import os
import traceback
from enum import Enum

from ..utils.helpers import make_logger, working_directory
from ..utils.encoding import DEFAULT_CUE_ENCODING
from .cue_parser import read_cue_file
from .metadata import resolve_track, output_filename
from .stages import (
    ShntoolSplitter,
    QaacTranscoder,
    probe_split_tracks,
    cleanup_album,
)


class PipelineState(Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SPLITTING = "splitting"
    TRANSCODING = "transcoding"
    CLEANING_UP = "cleaning_up"
    DONE = "done"
    FAILED = "failed"


class AlbumContext:
    """Paths for one album: the CUE file and its same-named siblings"""

    def __init__(self, cue_path):
        self.cue_path = os.path.abspath(cue_path)
        self.album_dir = os.path.dirname(self.cue_path)
        self.base_name = os.path.splitext(os.path.basename(self.cue_path))[0]
        self.image_path = self._sibling(".flac")
        self.artwork_path = self._sibling(".jpg")
        self.alt_artwork_path = self._sibling(".png")
        self.original_dir = None

    def _sibling(self, extension):
        return os.path.join(self.album_dir, self.base_name + extension)

    def source_paths(self):
        """Files removed by cleanup, in deletion order"""
        return [self.image_path, self.cue_path, self.artwork_path, self.alt_artwork_path]


class PipelineOrchestrator:
    """
    Runs one album through the conversion pipeline.

    The splitter must provide split(cue_path, image_path) -> bool and is
    called with the album directory as working directory. The transcoder must
    provide transcode(input_path, output_path, artwork_path, metadata) -> bool.
    """

    def __init__(self, context, splitter, transcoder, log, logfile=None,
                 encoding=DEFAULT_CUE_ENCODING):
        self.context = context
        self.splitter = splitter
        self.transcoder = transcoder
        self.log = log
        self.logfile = logfile
        self.encoding = encoding
        self.state = PipelineState.IDLE
        self.failed_stage = None
        self.document = None
        self.converted = []
        self.failed_tracks = []
        self.deleted = []
        self.cleanup_failures = []

    def _enter(self, state):
        self.state = state

    def _fail(self, message):
        self.failed_stage = self.state
        self.state = PipelineState.FAILED
        self.log(f"❌ {message}")
        return self._result("error", message)

    def _result(self, status, message=None):
        result = {
            "status": status,
            "state": self.state.value,
            "log": self.logfile,
            "converted": list(self.converted),
            "failed": list(self.failed_tracks),
            "deleted": list(self.deleted),
            "cleanup_failed": list(self.cleanup_failures),
        }
        if message:
            result["message"] = message
        if self.failed_stage is not None:
            result["failed_stage"] = self.failed_stage.value
        return result

    def run(self):
        """
        Execute every stage in order.

        Returns:
            Dictionary with status ("success", "partial" or "error") and details
        """
        try:
            return self._run()
        except Exception as e:
            self.log(f"💥 Fatal error: {str(e)}")
            self.log(f"Stack trace:\n{traceback.format_exc()}")
            self.failed_stage = self.state
            self.state = PipelineState.FAILED
            return self._result("error", str(e))

    def _run(self):
        ctx = self.context
        self.log(f"🚀 Starting conversion for: {ctx.cue_path}")

        self._enter(PipelineState.VALIDATING)
        if not self.validate():
            return self._fail(
                f"Audio image or artwork not found: {os.path.basename(ctx.image_path)}, "
                f"{os.path.basename(ctx.artwork_path)}"
            )

        self._enter(PipelineState.SPLITTING)
        try:
            self.document = read_cue_file(ctx.cue_path, self.encoding, self.log)
        except OSError as e:
            return self._fail(f"Could not read CUE file: {e}")
        self.log(f"💿 Album: {self.document.album_title or '?'} "
                 f"({len(self.document.tracks)} track(s) in CUE)")

        if not self.split():
            return self._fail("Splitting failed")
        self.log("✅ Splitting completed successfully")

        self._enter(PipelineState.TRANSCODING)
        self.transcode_tracks()

        self._enter(PipelineState.CLEANING_UP)
        self.cleanup()

        self._enter(PipelineState.DONE)
        self.log(f"📊 Summary: {len(self.converted)} converted, "
                 f"{len(self.failed_tracks)} failed")
        if self.failed_tracks:
            return self._result(
                "partial",
                f"{len(self.converted)} succeeded, {len(self.failed_tracks)} failed",
            )
        self.log("✅ Album completed successfully!")
        return self._result("success")

    def validate(self):
        ctx = self.context
        return os.path.exists(ctx.image_path) and os.path.exists(ctx.artwork_path)

    def split(self):
        ctx = self.context
        self.log(f"✂️ Splitting {os.path.basename(ctx.image_path)} using CUE sheet...")
        # The split tool resolves FILE references relative to the current directory
        with working_directory(ctx.album_dir) as original_dir:
            ctx.original_dir = original_dir
            return self.splitter.split(ctx.cue_path, ctx.image_path)

    def transcode_tracks(self):
        ctx = self.context
        for track_number, input_path in probe_split_tracks(ctx.album_dir):
            metadata = resolve_track(track_number, self.document)
            output_name = output_filename(metadata)
            output_path = os.path.join(ctx.album_dir, output_name)

            self.log(f"🎧 Track {track_number:02d}: {metadata.performer} - {metadata.title}")
            try:
                ok = self.transcoder.transcode(input_path, output_path, ctx.artwork_path, metadata)
            except Exception as e:
                self.log(f"  💥 Transcoder error on {os.path.basename(input_path)}: {e}")
                ok = False
            if ok:
                self.log(f"  ✅ Converted: {output_name}")
                self.converted.append(output_path)
            else:
                self.log(f"  ❌ Conversion failed: {os.path.basename(input_path)}")
                self.failed_tracks.append(input_path)

        if not self.converted and not self.failed_tracks:
            self.log("⚠️ No split tracks found")

    def cleanup(self):
        ctx = self.context
        self.log("🧹 Cleaning up source and intermediate files...")
        self.deleted, self.cleanup_failures = cleanup_album(
            ctx.source_paths(), ctx.album_dir, self.log
        )
        if self.cleanup_failures:
            self.log(f"⚠️ {len(self.cleanup_failures)} file(s) could not be deleted")
        else:
            self.log("✅ Cleanup completed")


def convert_album(cue_path, split_tool="shntool", transcoder="qaac64",
                  encoding=DEFAULT_CUE_ENCODING, log_dir="/tmp/cue_to_m4a_logs"):
    """
    Convert one CUE + FLAC album with the real external tools.

    Args:
        cue_path: Path to the CUE sheet
        split_tool: shntool executable
        transcoder: qaac executable
        encoding: CUE codec name or "auto"
        log_dir: Directory for the run log file

    Returns:
        Result dictionary from PipelineOrchestrator.run()
    """
    context = AlbumContext(cue_path)
    os.makedirs(log_dir, exist_ok=True)
    logfile = os.path.join(log_dir, f"{context.base_name}.log")
    log = make_logger(logfile, context.base_name)

    orchestrator = PipelineOrchestrator(
        context,
        ShntoolSplitter(logfile, split_tool),
        QaacTranscoder(logfile, transcoder),
        log,
        logfile=logfile,
        encoding=encoding,
    )
    return orchestrator.run()
