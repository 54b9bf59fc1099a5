"""
Logging setup.

Library modules only create loggers (logging.getLogger(__name__)); the
application decides where records go.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_DIR = Path.home() / ".aegis"


def setup_logger(debug: bool = False, log_dir: Optional[Path] = None) -> logging.Logger:
    """
    Setup file-based logger for engine debugging.

    Protocol traffic is logged at DEBUG level, so debug=True gives a full
    transcript of the engine session.

    Args:
        debug: If True, log at DEBUG level; otherwise INFO level
        log_dir: Directory for engine.log (default: ~/.aegis)

    Returns:
        Configured "aegis" logger
    """
    log_dir = Path(log_dir) if log_dir is not None else LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "engine.log"

    logger = logging.getLogger("aegis")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    logger.handlers.clear()

    handler = logging.FileHandler(log_file, mode='w')
    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


def setup_logging(verbose: bool = False):
    """Configure console logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
