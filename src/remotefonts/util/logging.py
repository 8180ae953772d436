from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_FILENAME = "remotefonts.log"
_HANDLER_NAMES = ("remotefonts.file", "remotefonts.console")


def _drop_own_handlers(root: logging.Logger) -> None:
    for handler in [h for h in root.handlers if h.get_name() in _HANDLER_NAMES]:
        root.removeHandler(handler)
        handler.close()


def setup_logging(log_dir: Path, level: int | str = logging.INFO) -> Path:
    """Install the rotating file + console handlers; safe to call repeatedly.

    Handlers added by anyone else stay attached to the root logger.
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / LOG_FILENAME
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=5)
    console_handler = logging.StreamHandler()
    for name, handler in zip(_HANDLER_NAMES, (file_handler, console_handler)):
        handler.set_name(name)
        handler.setFormatter(formatter)

    root = logging.getLogger()
    _drop_own_handlers(root)
    root.setLevel(level)
    root.addHandler(file_handler)
    root.addHandler(console_handler)
    # connection-pool chatter drowns the per-font lines at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    return log_path
