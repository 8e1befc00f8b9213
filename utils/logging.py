"""
Logging setup shared by the web server and the CLI.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"

_configured = False


def configure_logging(level: str = "INFO") -> None:
    """
    Install a single stdout handler on the root logger.

    Repeated calls only adjust the level.
    """
    global _configured
    root = logging.getLogger()
    root.setLevel(level.upper() if isinstance(level, str) else level)

    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    _configured = True
