# core/config.py
from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import replace
from pathlib import Path
from threading import RLock

from kmerprofile.constants.config_constants import CachePaths
from kmerprofile.constants.tool_configs import ToolConfig
from kmerprofile.constants.tool_configs import get_config as _get_config
from kmerprofile.constants.tool_configs import set_config as _set_config
from kmerprofile.logging import get_logger

from .errors import InvalidArgumentError

_LOG = get_logger("kmerprofile").getChild("core.config")
_LOCK = RLock()


def get_config() -> ToolConfig:
    """
    Return the global ToolConfig managed by kmerprofile.constants.tool_configs.
    """
    with _LOCK:
        return _get_config()


def set_cache_root(new_root: Path | str) -> None:
    """
    Override the cache root directory, keeping the rest of the current
    configuration (debug, log_level, valid_nucleotides).

    Parameters
    ----------
    new_root : Path or str
        New root path. Will be expanded and resolved.
    """
    root = Path(new_root).expanduser().resolve()
    with _LOCK:
        _set_config(replace(_get_config(), cache_paths=CachePaths(root)))
        _LOG.info("Cache root set to: %s", root)


def set_valid_nucleotides(symbols: str) -> None:
    """
    Change the default alphabet used by `Profile.normalize` when called
    without arguments.
    """
    cleaned = "".join(dict.fromkeys((symbols or "").strip().upper()))
    if not cleaned:
        raise InvalidArgumentError("The nucleotide alphabet cannot be empty.")
    with _LOCK:
        _set_config(replace(_get_config(), valid_nucleotides=cleaned))
        _LOG.info("Default valid nucleotides set to: %s", cleaned)


@contextmanager
def temporary_cache_root(temp_root: Path | str) -> Generator[None, None, None]:
    """
    Temporarily override the cache root (useful for tests or isolated runs).

    Example
    -------
    >>> from pathlib import Path
    >>> with temporary_cache_root(Path('./.tmp_cache')):
    ...     pass
    """
    prev_root = get_config().cache_paths.cache_root
    set_cache_root(temp_root)
    try:
        yield
    finally:
        set_cache_root(prev_root)


__all__ = [
    "get_config",
    "set_cache_root",
    "set_valid_nucleotides",
    "temporary_cache_root",
    "ToolConfig",
    "CachePaths",
]
