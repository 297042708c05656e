"""
Author: Charm
Copyright (c) 2025, All Rights Reserved.
"""

import os
import sys

from loguru import logger

from utils.auth_settings import get_auth_settings
from utils.be_config import AUTH_LOG_FILE, LOG_RETENTION, LOG_ROTATION

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "{extra[client_ip]} | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def setup_logging(level: str) -> None:
    """Install console and file sinks; records default to an unknown client."""
    logger.remove()
    logger.configure(extra={"client_ip": "-"})
    # diagnose=False keeps local variables (passwords) out of tracebacks
    logger.add(sys.stderr, level=level, format=LOG_FORMAT, diagnose=False)

    # Tests set TESTING=1 to keep log files out of the working tree
    if not os.getenv("TESTING"):
        logger.add(
            AUTH_LOG_FILE,
            level=level,
            format=LOG_FORMAT,
            rotation=LOG_ROTATION,
            retention=LOG_RETENTION,
            enqueue=True,
            backtrace=False,
            diagnose=False,
        )


setup_logging(get_auth_settings().LOG_LEVEL)

__all__ = ["logger", "setup_logging"]
