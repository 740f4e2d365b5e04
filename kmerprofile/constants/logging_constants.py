import logging
import os

# ----------------------------
# Defaults & Env Overrides
# ----------------------------

# Every logging knob is read from KMERPROFILE_LOG_<NAME>
# (LEVEL, FILE, STDERR, JSON, UTC, MAX_BYTES, BACKUPS).
LOG_ENV_PREFIX = "KMERPROFILE_LOG_"

LOG_DEFAULT_NAME = "kmerprofile"
LOG_DEFAULT_FILE_NAME = "kmerprofile.log"
LOG_DEFAULT_LEVEL = logging.INFO
LOG_DEFAULT_JSON = False
LOG_DEFAULT_STDERR = False
LOG_DEFAULT_UTC = False
# Profiles are small; a few MB of history is plenty.
LOG_DEFAULT_MAX_BYTES = 2 * 1024 * 1024
LOG_DEFAULT_BACKUPS = 3

LOG_LEVEL_MAP = {name: logging.getLevelName(name) for name in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")}

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def env_log_level() -> int:
    lvl = os.getenv(f"{LOG_ENV_PREFIX}LEVEL", "").strip().upper()
    return LOG_LEVEL_MAP.get(lvl, LOG_DEFAULT_LEVEL)


def env_log_flag(name: str, default: bool) -> bool:
    """Boolean KMERPROFILE_LOG_<name>; unset means `default`."""
    raw = os.getenv(f"{LOG_ENV_PREFIX}{name}")
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def env_log_int(name: str, default: int) -> int:
    """Integer KMERPROFILE_LOG_<name>; unset or unparsable means `default`."""
    raw = os.getenv(f"{LOG_ENV_PREFIX}{name}")
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default
