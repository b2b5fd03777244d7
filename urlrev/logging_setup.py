"""Logging configuration for css-urlrev."""

import logging

try:
    import colorlog
    _COLORLOG_AVAILABLE = True
except ImportError:
    _COLORLOG_AVAILABLE = False

log = logging.getLogger("urlrev")


def _setup_logging(debug: bool = False) -> None:
    """
    Configure the ``urlrev`` logger for command-line use.

    Skipped references and digests are logged at DEBUG, failed
    declarations at WARNING and per-run summaries at INFO.

    Args:
        debug: Show DEBUG records, including urllib3's connection log
    """
    level = logging.DEBUG if debug else logging.INFO
    log.setLevel(level)
    log.handlers.clear()

    if _COLORLOG_AVAILABLE:
        handler = colorlog.StreamHandler()
        handler.setFormatter(colorlog.ColoredFormatter(
            "%(log_color)s%(asctime)s [%(levelname)s]%(reset)s %(message)s",
            datefmt="%H:%M:%S",
            log_colors={
                "DEBUG":    "cyan",
                "INFO":     "green",
                "WARNING":  "yellow",
                "ERROR":    "red",
                "CRITICAL": "bold_red",
            },
        ))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(message)s", datefmt="%H:%M:%S"
        ))
    log.addHandler(handler)

    urllib3_log = logging.getLogger("urllib3")
    urllib3_log.setLevel(logging.DEBUG if debug else logging.WARNING)
    if debug:
        urllib3_log.handlers.clear()
        urllib3_log.addHandler(handler)
