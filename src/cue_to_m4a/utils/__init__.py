"""Utility functions and helpers"""

from .helpers import safe_print, make_logger, run_command, working_directory
from .encoding import decode_cue_bytes, DEFAULT_CUE_ENCODING

__all__ = [
    "safe_print",
    "make_logger",
    "run_command",
    "working_directory",
    "decode_cue_bytes",
    "DEFAULT_CUE_ENCODING",
]
