"""Logging setup for the plugin entrypoint, headless runs and tests.

Every module logs through ``logging.getLogger(__name__)``; this module
only decides where records go and how they look:
    - stderr console handler (optionally colored)
    - optional log file, plain or size/time rotated, human or JSON lines
    - contextual fields (``app``, ``icon``) attached to every record

Public API:
    setup_logging(log_level="INFO", context={"app": "icon_variants"})
    get_logger(name)
    push_context(icon="arrow-left") / pop_context(keys=["icon"])
    with log_context(icon="arrow-left"): ...

Line formats:
    Human: 2025-10-28T13:45:12.345Z | INFO     | app=icon_variants icon=home | Built set
    JSON:  {"t": "2025-10-28T13:45:12.345+00:00", "lvl": "INFO", "icon": "home", "msg": "Built set"}

Context lives in a ``contextvars.ContextVar`` so concurrent runs on
different threads do not see each other's fields.  ``setup_logging`` can
be called repeatedly: it replaces only the handlers it installed itself.
"""

import contextlib
import contextvars
import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional


_context_var: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar(
    'icon_variants_log_context', default={}
)

# Handlers owned by setup_logging; other handlers on the root logger are left alone
_installed_handlers: List[logging.Handler] = []

_RESET = '\033[0m'
_LEVEL_COLORS = {
    'DEBUG': '\033[36m',
    'INFO': '\033[32m',
    'WARNING': '\033[33m',
    'ERROR': '\033[31m',
    'CRITICAL': '\033[35m',
}


class ContextFormatter(logging.Formatter):
    """Formatter adding the current context fields to each line.

    Parameters
    ----------
    fmt_mode : str
        ``"human"`` for pipe-separated lines, ``"json"`` for one JSON
        object per line.
    use_color : bool
        Color the level name.  Ignored when stderr is not a terminal.
    tz : str
        ``"UTC"`` or ``"local"`` timestamps.
    """

    def __init__(self, fmt_mode: str = "human", use_color: bool = True, tz: str = "UTC"):
        super().__init__()
        if fmt_mode not in ("human", "json"):
            raise ValueError(f"Unknown format mode: {fmt_mode}. Use 'human' or 'json'.")
        self.fmt_mode = fmt_mode
        self.use_color = use_color and sys.stderr.isatty()
        self.tz = tz

    def _timestamp(self, record: logging.LogRecord) -> datetime:
        if self.tz == "UTC":
            return datetime.fromtimestamp(record.created, tz=timezone.utc)
        return datetime.fromtimestamp(record.created)

    def format(self, record: logging.LogRecord) -> str:
        ts = self._timestamp(record)
        context = _context_var.get()
        if self.fmt_mode == "json":
            payload = {
                't': ts.isoformat(),
                'lvl': record.levelname,
                'name': record.name,
                'pid': os.getpid(),
                **context,
                'msg': record.getMessage(),
            }
            if record.exc_info:
                payload['exc'] = self.formatException(record.exc_info)
            return json.dumps(payload, default=str)

        level = f"{record.levelname:8s}"
        if self.use_color:
            level = f"{_LEVEL_COLORS.get(record.levelname, '')}{level}{_RESET}"
        fields = [ts.strftime('%Y-%m-%dT%H:%M:%S.%f')[:-3] + 'Z', level]
        if context:
            fields.append(' '.join(f"{key}={value}" for key, value in context.items()))
        fields.append(record.getMessage())

        line = ' | '.join(fields)
        if record.exc_info:
            line += '\n' + self.formatException(record.exc_info)
        return line


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    *,
    json: bool = False,
    color: bool = True,
    to_stderr: bool = True,
    rotate: Optional[Dict[str, Any]] = None,
    tz: str = "UTC",
    capture_warnings: bool = True,
    quiet_libs: Optional[List[str]] = None,
    context: Optional[Dict[str, Any]] = None,
) -> List[logging.Handler]:
    """Configure the root logger.

    Parameters
    ----------
    log_level : str
        "DEBUG", "INFO", "WARNING", "ERROR" or "CRITICAL".
    log_file : str, optional
        Also log to this file (parent directories are created).
    json : bool
        JSON lines in the log file.  The console is always human-readable.
    color : bool
        Colored console level names.
    to_stderr : bool
        Install the console handler.
    rotate : dict, optional
        File rotation:
        - {"mode": "size", "max_bytes": 5_000_000, "backup_count": 3}
        - {"mode": "time", "when": "D", "interval": 1, "backup_count": 7}
    tz : str
        "UTC" (default) or "local" timestamps.
    capture_warnings : bool
        Route ``warnings.warn`` through logging.
    quiet_libs : list[str], optional
        Loggers raised to WARNING (e.g. ``["shapely"]``).
    context : dict, optional
        Fields pushed onto the log context (e.g. ``{"app": "icon_variants"}``).

    Returns
    -------
    list[logging.Handler]
        The handlers now installed by this function.
    """
    root = logging.getLogger()
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root.removeHandler(handler)
        handler.close()

    root.setLevel(getattr(logging, log_level.upper()))

    handlers: List[logging.Handler] = []
    if to_stderr:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(ContextFormatter("human", color, tz))
        handlers.append(console)
    if log_file:
        handlers.append(_create_file_handler(log_file, rotate, json, tz))

    for handler in handlers:
        root.addHandler(handler)
    _installed_handlers.extend(handlers)

    if context:
        push_context(**context)
    for lib in quiet_libs or ():
        logging.getLogger(lib).setLevel(logging.WARNING)
    if capture_warnings:
        logging.captureWarnings(True)

    return list(handlers)


def _create_file_handler(
    log_file: str,
    rotate: Optional[Dict[str, Any]],
    json_format: bool,
    tz: str,
) -> logging.Handler:
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    mode = rotate.get('mode', 'size') if rotate else None
    if mode is None:
        handler: logging.Handler = logging.FileHandler(log_file, encoding='utf-8')
    elif mode == 'size':
        handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=rotate.get('max_bytes', 5_000_000),
            backupCount=rotate.get('backup_count', 3),
            encoding='utf-8',
        )
    elif mode == 'time':
        handler = logging.handlers.TimedRotatingFileHandler(
            log_file,
            when=rotate.get('when', 'D'),
            interval=rotate.get('interval', 1),
            backupCount=rotate.get('backup_count', 7),
            encoding='utf-8',
        )
    else:
        raise ValueError(f"Unknown rotation mode: {mode}. Use 'size' or 'time'.")

    handler.setFormatter(ContextFormatter("json" if json_format else "human", use_color=False, tz=tz))
    return handler


def get_logger(name: str) -> logging.Logger:
    """Logger by name, typically ``__name__``."""
    return logging.getLogger(name)


def push_context(**fields: Any) -> None:
    """Attach *fields* to every subsequent record in this context.

    Examples
    --------
    >>> push_context(app="icon_variants")
    >>> push_context(icon="home")
    >>> logger.info("Built set")  # → "... | app=icon_variants icon=home | Built set"
    """
    _context_var.set({**_context_var.get(), **fields})


def pop_context(keys: Optional[List[str]] = None) -> None:
    """Remove *keys* from the context, or everything when ``None``."""
    if keys is None:
        _context_var.set({})
        return
    remaining = dict(_context_var.get())
    for key in keys:
        remaining.pop(key, None)
    _context_var.set(remaining)


@contextlib.contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Push *fields* for the duration of a ``with`` block."""
    push_context(**fields)
    try:
        yield
    finally:
        pop_context(keys=list(fields))


def get_context() -> Dict[str, Any]:
    """Copy of the current context fields."""
    return dict(_context_var.get())
