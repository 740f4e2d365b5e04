from __future__ import annotations

import json
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Iterable, Optional

from appdirs import user_log_dir

from kmerprofile.constants.logging_constants import (
    LOG_DEFAULT_BACKUPS,
    LOG_DEFAULT_FILE_NAME,
    LOG_DEFAULT_JSON,
    LOG_DEFAULT_LEVEL,
    LOG_DEFAULT_MAX_BYTES,
    LOG_DEFAULT_NAME,
    LOG_DEFAULT_STDERR,
    LOG_DEFAULT_UTC,
    LOG_ENV_PREFIX,
    LOG_LEVEL_MAP,
    env_log_flag,
    env_log_int,
    env_log_level,
)

# Logger names already configured by setup_logger(); prevents duplicated handlers.
_CONFIGURED_ROOTS: set[str] = set()

# LogRecord attributes that are never copied into the JSON payload.
_RESERVED_ATTRS = frozenset({
    "args", "asctime", "created", "exc_info", "exc_text", "filename",
    "funcName", "levelname", "levelno", "lineno", "module", "msecs",
    "msg", "name", "pathname", "process", "processName", "relativeCreated",
    "stack_info", "thread", "threadName", "taskName",
})


# ---------- helpers ----------

def _to_level(level: int | str | None) -> int:
    if level is None:
        return env_log_level()
    if isinstance(level, str):
        return LOG_LEVEL_MAP.get(level.upper(), LOG_DEFAULT_LEVEL)
    return int(level)


def _resolve_log_file(default_name: str = LOG_DEFAULT_FILE_NAME,
                      explicit_path: Optional[Path] = None) -> Optional[Path]:
    """
    Pick the log file location.

    Order: explicit argument, KMERPROFILE_LOG_FILE, the configured cache
    ``logs/`` directory, appdirs' user log dir. Returns None when none of
    them can be used, in which case no file handler is attached.
    """
    candidate = explicit_path
    if candidate is None:
        env_path = os.getenv(f"{LOG_ENV_PREFIX}FILE")
        candidate = Path(env_path) if env_path else None

    if candidate is not None:
        p = Path(candidate).expanduser()
        p.parent.mkdir(parents=True, exist_ok=True)
        return p

    # Imported lazily: tool_configs pulls in the cache layout.
    try:
        from kmerprofile.constants.tool_configs import get_config

        root = Path(get_config().cache_paths.logs())
        root.mkdir(parents=True, exist_ok=True)
        return root / default_name
    except OSError:
        pass

    try:
        base = Path(user_log_dir("kmerprofile", "KmerProfile"))
        base.mkdir(parents=True, exist_ok=True)
        return base / default_name
    except OSError:
        pass

    return None


class _JsonFormatter(logging.Formatter):
    """
    One JSON object per line. Extra record attributes (e.g. those injected by
    add_context) are included when JSON-serializable, stringified otherwise.
    """

    def __init__(self, *, use_utc: bool = False) -> None:
        super().__init__()
        self._use_utc = use_utc

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # type: ignore[override]
        if self._use_utc:
            import time

            return time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
        return super().formatTime(record, datefmt=datefmt)

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, Any] = {
            "time": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        for k, v in record.__dict__.items():
            if k in _RESERVED_ATTRS:
                continue
            try:
                json.dumps({k: v})
                payload[k] = v
            except (TypeError, ValueError):
                payload[k] = str(v)

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)  # type: ignore[arg-type]
        if record.stack_info:
            payload["stack"] = self.formatStack(record.stack_info)

        return json.dumps(payload, ensure_ascii=False)


def _formatter(fmt: str, datefmt: Optional[str], *, use_json: bool, use_utc: bool) -> logging.Formatter:
    if use_json:
        return _JsonFormatter(use_utc=use_utc)
    return logging.Formatter(fmt=fmt, datefmt=datefmt)


def _make_file_handler(path: Path, *, max_bytes: int, backups: int) -> logging.Handler:
    try:
        return RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backups, encoding="utf-8")
    except OSError:
        return logging.FileHandler(path, encoding="utf-8")


# ---------- public API ----------

def setup_logger(
    name: str = LOG_DEFAULT_NAME,
    level: int | str | None = None,
    *,
    with_console: bool | None = None,
    with_file: bool = True,
    file_path: Optional[Path] = None,
    fmt_console: str = "[%(levelname)s] %(message)s",
    fmt_file: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt_console: Optional[str] = None,
    datefmt_file: Optional[str] = "%Y-%m-%d %H:%M:%S",
    use_json: Optional[bool] = None,
    use_utc: Optional[bool] = None,
    max_bytes: Optional[int] = None,
    backups: Optional[int] = None,
    propagate: bool = False,
    force_reconfigure: bool = False,
    extra_filters: Optional[Iterable[logging.Filter]] = None,
) -> logging.Logger:
    """
    Configure and return the package root logger.

    Calling it again for the same `name` only updates levels, unless
    `force_reconfigure=True`, in which case handlers are rebuilt.

    Parameters
    ----------
    name : str
        Logger name (package root).
    level : int | str | None
        Logging level. None reads KMERPROFILE_LOG_LEVEL.
    with_console : bool | None
        Attach a stderr handler. None reads KMERPROFILE_LOG_STDERR.
    with_file : bool
        Attach a (rotating) file handler.
    file_path : Optional[Path]
        Force the log file location.
    use_json : Optional[bool]
        JSON output. None reads KMERPROFILE_LOG_JSON.
    use_utc : Optional[bool]
        UTC timestamps in JSON mode. None reads KMERPROFILE_LOG_UTC.
    max_bytes, backups : Optional[int]
        Rotation settings. None reads KMERPROFILE_LOG_MAX_BYTES / _BACKUPS.
    propagate : bool
        Whether records also reach ancestor loggers.
    force_reconfigure : bool
        Drop existing handlers and rebuild them.
    extra_filters : Optional[Iterable[logging.Filter]]
        Filters attached to the logger.

    Returns
    -------
    logging.Logger
    """
    lvl = _to_level(level)
    if with_console is None:
        with_console = env_log_flag("STDERR", LOG_DEFAULT_STDERR)
    if use_json is None:
        use_json = env_log_flag("JSON", LOG_DEFAULT_JSON)
    if use_utc is None:
        use_utc = env_log_flag("UTC", LOG_DEFAULT_UTC)
    if max_bytes is None:
        max_bytes = env_log_int("MAX_BYTES", LOG_DEFAULT_MAX_BYTES)
    if backups is None:
        backups = env_log_int("BACKUPS", LOG_DEFAULT_BACKUPS)

    logger = logging.getLogger(name)
    logger.propagate = propagate

    if name in _CONFIGURED_ROOTS:
        if not force_reconfigure:
            logger.setLevel(lvl)
            for h in logger.handlers:
                if not isinstance(h, logging.FileHandler):
                    h.setLevel(lvl)
            return logger
        reset_logging(name)

    logger.setLevel(lvl)

    if with_console:
        ch = logging.StreamHandler()
        ch.setLevel(lvl)
        ch.setFormatter(_formatter(fmt_console, datefmt_console, use_json=bool(use_json), use_utc=bool(use_utc)))
        logger.addHandler(ch)

    if with_file:
        path = _resolve_log_file(explicit_path=file_path)
        if path is not None:
            fh = _make_file_handler(path, max_bytes=int(max_bytes), backups=int(backups))
            fh.setLevel(logging.DEBUG)  # file keeps everything the logger lets through
            fh.setFormatter(_formatter(fmt_file, datefmt_file, use_json=bool(use_json), use_utc=bool(use_utc)))
            logger.addHandler(fh)

    for flt in extra_filters or ():
        logger.addFilter(flt)

    _CONFIGURED_ROOTS.add(name)
    return logger


def get_logger(name: str = LOG_DEFAULT_NAME) -> logging.Logger:
    """
    Return the named logger, configuring it with defaults on first use.
    """
    if name not in _CONFIGURED_ROOTS:
        setup_logger(name=name)
    return logging.getLogger(name)


class _ContextFilter(logging.Filter):
    """Stamp static key/value pairs (component, profile id, ...) on every record."""

    def __init__(self, **static_context: Any) -> None:
        super().__init__()
        self._ctx = static_context

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        for k, v in self._ctx.items():
            setattr(record, k, v)
        return True


def add_context(logger: logging.Logger, **context: Any) -> None:
    """
    Attach static context (e.g., component='profile', codec='binary') to a logger.
    """
    if not context:
        return
    logger.addFilter(_ContextFilter(**context))


def set_global_level(level: int | str, name: str = LOG_DEFAULT_NAME) -> None:
    """
    Change the level of the root logger and its handlers.
    """
    lvl = _to_level(level)
    logger = get_logger(name)
    logger.setLevel(lvl)
    for h in logger.handlers:
        h.setLevel(lvl)


def silence_external() -> None:
    """
    Lower verbosity of the third-party libraries pulled in by exports.
    """
    for noisy in ("fsspec", "pyarrow", "numexpr", "matplotlib"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def reset_logging(name: str = LOG_DEFAULT_NAME) -> None:
    """
    Remove all handlers for the given logger name and mark it as unconfigured.
    Useful for test teardown or dynamic reconfiguration.
    """
    logger = logging.getLogger(name)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    _CONFIGURED_ROOTS.discard(name)
