"""ScriptMark - export annotated screenplay text as semantic HTML.

Takes plain text plus style tags computed by an external annotator and
produces an HTML document with one element per styled paragraph run.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

__version__ = "0.1.0"

_HANDLER_NAME = "scriptmark"


def get_version_string() -> str:
    """Get the version string shown by the command-line tools."""
    return f"ScriptMark {__version__}"


def setup_logging(
    log_dir: Path = Path("logs"), *, console_level: int = logging.WARNING
) -> Path:
    """Send export logs to a per-process rotating file and to stderr.

    The file always gets DEBUG (scanner run counts included).  The console
    only gets *console_level* and above, so INFO lines do not interleave with
    the CLI's progress bar unless ``--verbose`` asks for them.  Calling this
    again replaces the handlers installed by the previous call.

    Returns:
        Path to the log file.
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"scriptmark.{os.getpid()}.log"

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in [h for h in root_logger.handlers if h.get_name() == _HANDLER_NAME]:
        root_logger.removeHandler(handler)
        handler.close()

    # File handler - detailed logging with rotation (10MB, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.set_name(_HANDLER_NAME)
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(file_formatter)

    # Console handler - stderr so --stdout output stays clean
    console_handler = logging.StreamHandler()
    console_handler.set_name(_HANDLER_NAME)
    console_handler.setLevel(console_level)
    console_formatter = logging.Formatter("%(levelname)s: %(message)s")
    console_handler.setFormatter(console_formatter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logging.getLogger(__name__).debug(
        "%s logging to %s (console level %s)",
        get_version_string(),
        log_file.absolute(),
        logging.getLevelName(console_level),
    )
    return log_file
