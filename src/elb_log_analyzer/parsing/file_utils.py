"""
File helpers for reading load-balancer log files.

The load balancer delivers logs gzip-compressed; files may also have been
decompressed or renamed by the caller, so compression is detected from
the content rather than trusted from the name alone.
"""

import gzip
from pathlib import Path
from typing import IO, Union

GZIP_MAGIC = b"\x1f\x8b"


def is_gzip_file(path: Path) -> bool:
    """Check for a .gz suffix or the gzip magic bytes."""
    if path.suffix.lower() == ".gz":
        return True
    with open(path, "rb") as f:
        return f.read(2) == GZIP_MAGIC


def open_log_file(
    file_path: Union[str, Path],
    encoding: str = "utf-8",
) -> IO[str]:
    """
    Open a log file in text mode, decompressing gzip transparently.

    Args:
        file_path: Path to the log file
        encoding: Text encoding (default: utf-8)

    Returns:
        Open file handle (text mode)

    Raises:
        FileNotFoundError: If file doesn't exist
        PermissionError: If file cannot be read
        gzip.BadGzipFile: If file has .gz extension but is not valid gzip
    """
    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"Log file not found: {file_path}")

    if is_gzip_file(path):
        return gzip.open(path, "rt", encoding=encoding)
    return open(path, "r", encoding=encoding)
