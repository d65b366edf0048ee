import logging
import sys
from typing import Union


class _NoiseFilter(logging.Filter):
    """
    Keep the console readable:
    - allow all taskboard and uvicorn logs
    - other third-party libraries only at WARNING+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name.startswith(("taskboard", "uvicorn")):
            return True
        return record.levelno >= logging.WARNING


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Configure a single stderr handler on the root logger.

    Call this ONCE, before the app is built.
    """
    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(fmt)
    ch.addFilter(_NoiseFilter())
    root.addHandler(ch)

    logging.captureWarnings(True)
