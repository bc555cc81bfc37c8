"""General utility functions"""
import os
import sys
import time
import subprocess
from contextlib import contextmanager


def safe_print(msg):
    """Print with handling for surrogate characters that can't be encoded"""
    try:
        print(msg)
    except UnicodeEncodeError:
        # Replace problematic characters with safe representation
        safe_msg = msg.encode('utf-8', errors='replace').decode('utf-8')
        print(safe_msg)
    sys.stdout.flush()


def make_logger(logfile, tag):
    """
    Build a log function writing timestamped lines to stdout and a log file.
    
    Args:
        logfile: Path to the run log file
        tag: Short label identifying the run (usually the album name)
        
    Returns:
        Function taking a single message string
    """
    def log(msg):
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S")
        formatted_msg = f"[{timestamp}] [{tag}] {msg}"
        safe_print(formatted_msg)
        with open(logfile, "a", encoding="utf-8", errors="replace") as f:
            f.write(formatted_msg + "\n")
            f.flush()

    return log


def run_command(cmd, logfile, env=None):
    """
    Execute a command and log its output to a file.
    
    Args:
        cmd: Command and arguments as a list
        logfile: Path to log file for output
        env: Optional environment variables dict
        
    Returns:
        Exit code of the command
    """
    with open(logfile, "a", encoding="utf-8", errors="replace") as f:
        # Handle potential encoding issues in command strings
        try:
            cmd_str = ' '.join(str(c) for c in cmd)
        except UnicodeEncodeError:
            cmd_str = ' '.join(repr(c) for c in cmd)
        
        f.write(f"\n$ {cmd_str}\n")
        f.flush()
        try:
            result = subprocess.run(cmd, stdout=f, stderr=f, check=False, env=env)
        except (OSError, ValueError) as e:
            # Missing executable, permission problem or NUL byte in an argument
            f.write(f"[Failed to start: {e}]\n")
            f.flush()
            return 127
        f.write(f"[Exit code: {result.returncode}]\n")
        f.flush()
        return result.returncode


@contextmanager
def working_directory(path):
    """Temporarily change the process working directory, restoring it on exit"""
    original_cwd = os.getcwd()
    os.chdir(path)
    try:
        yield original_cwd
    finally:
        os.chdir(original_cwd)
