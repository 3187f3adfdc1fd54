"""
Logging setup shared by command-line scripts.
"""

import logging
import sys
from typing import Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Configure root logging for a script run.

    Logs go to stderr so that stdout stays free for command output.

    Args:
        level: Logging level (e.g., logging.DEBUG or "DEBUG")
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )
