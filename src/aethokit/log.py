import logging
import sys
import time


def new_logger(level: int = logging.INFO) -> logging.Logger:
    """Attach a UTC stderr handler to the package logger; used by the CLI."""
    log = logging.getLogger("aethokit")
    log.setLevel(level)
    fmt = logging.Formatter(
        fmt="%(asctime)sZ %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
    fmt.converter = time.gmtime
    if not any(getattr(h, "_aethokit", False) for h in log.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler._aethokit = True  # type: ignore[attr-defined]
        handler.setFormatter(fmt)
        log.addHandler(handler)
    return log
