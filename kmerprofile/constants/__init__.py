# __init__.py
"""
Public constants API for kmerprofile.constants.

This module re-exports selected names to provide a clean and stable surface.
"""

# cli_constants
from .cli_constants import DebugMode, ExportOption, SaveMode

# config_constants
from .config_constants import CachePaths

# logging_constants
from .logging_constants import (
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

# tool_configs
from .tool_configs import ToolConfig, get_config, set_config

# tool_constants
from .tool_constants import _ENV_PREFIX as KMERPROFILE_ENV_PREFIX
from .tool_constants import (
    BLOCK_SIZE,
    DEFAULT_COMPLEMENTARY_NUCLEOTIDES,
    DEFAULT_VALID_NUCLEOTIDES,
    DIM_VECTOR_KMER_FREQ,
    INITIAL_CAPACITY,
    MAGIC_STRING_B,
    MAGIC_STRING_T,
    MAX_KMER_LENGTH,
    MISSING_NUCLEOTIDE,
    NOT_FOUND,
    UNKNOWN_PROFILE_ID,
)

__all__ = [
    # tool_constants
    "KMERPROFILE_ENV_PREFIX",
    "MISSING_NUCLEOTIDE",
    "MAX_KMER_LENGTH",
    "DEFAULT_VALID_NUCLEOTIDES",
    "DEFAULT_COMPLEMENTARY_NUCLEOTIDES",
    "DIM_VECTOR_KMER_FREQ",
    "INITIAL_CAPACITY",
    "BLOCK_SIZE",
    "UNKNOWN_PROFILE_ID",
    "MAGIC_STRING_T",
    "MAGIC_STRING_B",
    "NOT_FOUND",
    # config_constants
    "CachePaths",
    # tool_configs
    "ToolConfig",
    "get_config",
    "set_config",
    # logging_constants
    "LOG_ENV_PREFIX",
    "LOG_DEFAULT_NAME",
    "LOG_DEFAULT_FILE_NAME",
    "LOG_DEFAULT_LEVEL",
    "LOG_DEFAULT_JSON",
    "LOG_DEFAULT_STDERR",
    "LOG_DEFAULT_UTC",
    "LOG_DEFAULT_MAX_BYTES",
    "LOG_DEFAULT_BACKUPS",
    "LOG_LEVEL_MAP",
    "env_log_level",
    "env_log_flag",
    "env_log_int",
    # cli_constants
    "SaveMode",
    "ExportOption",
    "DebugMode",
]
