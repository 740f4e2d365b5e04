# tool_configs.py
import os
import platform
from dataclasses import dataclass, field
from pathlib import Path

from .config_constants import CachePaths
from .logging_constants import env_log_level
from .tool_constants import _ENV_PREFIX, DEFAULT_VALID_NUCLEOTIDES


def _default_cache_root() -> Path:
    """
    Determine the default cache root honoring KMERPROFILE_CACHE_ROOT if set
    and following OS-specific conventions otherwise.
    """
    system = platform.system().lower()
    if system == "darwin":
        base = Path.home() / "Library" / "Caches"
    elif system == "windows":
        base = Path(os.getenv("LOCALAPPDATA", Path.home() / "AppData" / "Local"))
    else:
        base = Path(os.getenv("XDG_CACHE_HOME", Path.home() / ".cache"))

    env = os.getenv(f"{_ENV_PREFIX}CACHE_ROOT")
    return Path(env) if env else base


def _default_valid_nucleotides() -> str:
    """
    Alphabet used by `normalize` when the caller does not pass one.
    KMERPROFILE_VALID_NUCLEOTIDES overrides the built-in "ACGT".
    """
    env = os.getenv(f"{_ENV_PREFIX}VALID_NUCLEOTIDES")
    return env.strip().upper() if env and env.strip() else DEFAULT_VALID_NUCLEOTIDES


@dataclass
class ToolConfig:
    """
    Global configuration container for kmerprofile runtime.
    """

    cache_paths: CachePaths = field(default_factory=lambda: CachePaths(_default_cache_root()))
    debug: bool = False
    log_level: int = field(default_factory=env_log_level)
    valid_nucleotides: str = field(default_factory=_default_valid_nucleotides)


# Global singleton for convenience (simple and testable)
_GLOBAL: ToolConfig | None = None


def get_config() -> ToolConfig:
    """
    Return the global ToolConfig, creating it on first use.
    Ensures cache directories exist.
    """
    global _GLOBAL
    if _GLOBAL is None:
        _GLOBAL = ToolConfig()
        _GLOBAL.cache_paths.ensure_all()
    return _GLOBAL


def set_config(cfg: ToolConfig) -> None:
    """
    Replace the global ToolConfig with a custom instance.
    Ensures cache directories exist.
    """
    global _GLOBAL
    _GLOBAL = cfg
    _GLOBAL.cache_paths.ensure_all()
