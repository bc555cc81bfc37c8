"""Command line entry point"""
import os
import sys
import argparse

from .utils.helpers import safe_print
from .utils.encoding import DEFAULT_CUE_ENCODING
from .core.pipeline import convert_album

DEFAULT_LOG_DIR = "/tmp/cue_to_m4a_logs"


def parse_arguments(argv=None):
    """Parse command line arguments and environment variables"""
    # Read defaults from environment variables
    env_split_tool = os.environ.get("SPLIT_TOOL", "shntool")
    env_transcoder = os.environ.get("TRANSCODER", "qaac64")
    env_encoding = os.environ.get("CUE_ENCODING", DEFAULT_CUE_ENCODING)
    env_log_dir = os.environ.get("LOG_DIR", DEFAULT_LOG_DIR)

    parser = argparse.ArgumentParser(
        description="Convert a CUE + FLAC album image into tagged .m4a tracks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
The CUE file must sit next to <name>.flac and <name>.jpg. On success the
image, CUE sheet, artwork and split files are deleted.

Examples:
  %(prog)s "/music/Album/Album.cue"
  %(prog)s --encoding auto --transcoder qaac "/music/Album/Album.cue"

Environment Variables:
  SPLIT_TOOL    - shntool executable
  TRANSCODER    - qaac executable
  CUE_ENCODING  - CUE sheet encoding, or "auto"
  LOG_DIR       - Directory for run log files
"""
    )

    parser.add_argument(
        "cue_path",
        help="Path to the CUE sheet"
    )
    parser.add_argument(
        "--split-tool",
        default=env_split_tool,
        help=f"shntool executable (default: {env_split_tool}, env: SPLIT_TOOL)"
    )
    parser.add_argument(
        "--transcoder",
        default=env_transcoder,
        help=f"qaac executable (default: {env_transcoder}, env: TRANSCODER)"
    )
    parser.add_argument(
        "--encoding",
        default=env_encoding,
        help=f"CUE sheet encoding or 'auto' (default: {env_encoding}, env: CUE_ENCODING)"
    )
    parser.add_argument(
        "--log-dir",
        default=env_log_dir,
        help=f"Directory for run log files (default: {env_log_dir}, env: LOG_DIR)"
    )

    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point"""
    args = parse_arguments(argv)

    if not os.path.isfile(args.cue_path):
        safe_print(f"❌ CUE file not found: {args.cue_path}")
        return 1

    try:
        result = convert_album(
            args.cue_path,
            split_tool=args.split_tool,
            transcoder=args.transcoder,
            encoding=args.encoding,
            log_dir=args.log_dir,
        )
    except KeyboardInterrupt:
        safe_print("\n🛑 Interrupted")
        return 130
    except OSError as e:
        safe_print(f"❌ Could not set up logging in {args.log_dir}: {e}")
        return 1

    if result["status"] == "error":
        safe_print(f"❌ {result.get('message', 'conversion failed')}")
        safe_print(f"📄 Full log available at: {result['log']}")
        return 1

    if result["status"] == "partial":
        safe_print(f"⚠️ {result['message']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
