#!/usr/bin/env python3
"""
cue-to-m4a - Main Entry Point

Converts a single-file album rip (FLAC image + CUE sheet) into tagged .m4a
tracks. Features:
- CUE metadata extraction with legacy Shift_JIS decoding
- Track splitting with shntool
- AAC encoding with qaac, embedding tags and cover art
- Removal of source and intermediate files afterwards
"""
import os
import sys

# Add src directory to Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from cue_to_m4a.cli import main


if __name__ == "__main__":
    sys.exit(main())
