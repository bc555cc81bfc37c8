"""
cue-to-m4a - convert a single-file album rip into tagged per-track AAC files

This package provides functionality to:
- Read album and track metadata from a CUE sheet
- Split the FLAC image into tracks with shntool
- Encode each track to .m4a with qaac, embedding tags and artwork
- Remove the image, CUE sheet, artwork and split intermediates afterwards
"""

__version__ = "1.0.0"
__author__ = "cue-to-m4a Project"
