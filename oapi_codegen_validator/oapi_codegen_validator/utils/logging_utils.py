import logging
import sys
from typing import Optional, Union

DEFAULT_FORMAT = "%(name)s - %(levelname)s - %(message)s"


class _BelowLevelFilter(logging.Filter):
    """Pass only records strictly below a threshold."""

    def __init__(self, threshold: int) -> None:
        super().__init__()
        self._threshold = threshold

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self._threshold


def resolve_level(level: Union[int, str, None], default: int = logging.INFO) -> int:
    """Turn a level name such as ``"debug"`` into its numeric value."""
    if level is None:
        return default
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else default


def configure_split_stream_logging(
    *,
    level: Union[int, str] = logging.INFO,
    stderr_level: Union[int, str] = logging.WARNING,
    formatter: Optional[logging.Formatter] = None,
) -> None:
    """Route diagnostics to stdout and problems to stderr.

    Records below ``stderr_level`` go to stdout, the rest to stderr, so a
    caller piping the enriched document through stdout redirection still sees
    per-property failures on the terminal.
    """
    level = resolve_level(level)
    stderr_level = max(resolve_level(stderr_level, logging.WARNING), logging.DEBUG)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    formatter = formatter or logging.Formatter(DEFAULT_FORMAT)

    stdout_handler = logging.StreamHandler(stream=sys.stdout)
    stdout_handler.setLevel(logging.DEBUG)
    stdout_handler.addFilter(_BelowLevelFilter(stderr_level))
    stdout_handler.setFormatter(formatter)

    stderr_handler = logging.StreamHandler(stream=sys.stderr)
    stderr_handler.setLevel(stderr_level)
    stderr_handler.setFormatter(formatter)

    root.addHandler(stdout_handler)
    root.addHandler(stderr_handler)
