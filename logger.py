# logger.py
import logging
import sys

LOG_FILE = "/var/log/mender-setup.log"

_stderr_handler = logging.StreamHandler(sys.stderr)


def setup_logger() -> logging.Logger:
    logger = logging.getLogger("mender_setup")
    logger.setLevel(logging.DEBUG)

    fmt = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    # Try to write to log file; fall back to /tmp if /var/log not writable
    try:
        fh = logging.FileHandler(LOG_FILE)
    except OSError:
        fh = logging.FileHandler("/tmp/mender-setup.log")
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(fmt)

    _stderr_handler.setLevel(logging.WARNING)
    _stderr_handler.setFormatter(fmt)

    if not logger.handlers:
        logger.addHandler(fh)
        logger.addHandler(_stderr_handler)
    return logger


def set_level(name: str) -> bool:
    """Set the stderr threshold from a level name. Returns False if unknown."""
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        return False
    _stderr_handler.setLevel(level)
    return True


log = setup_logger()
