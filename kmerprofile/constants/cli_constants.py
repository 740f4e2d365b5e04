# cli_constants.py
from enum import Enum


class SaveMode(str, Enum):
    """On-disk profile formats accepted by the CLI."""
    text = "t"
    binary = "b"


class ExportOption(str, Enum):
    """Export formats for CLI outputs."""
    csv = "csv"
    npy = "npy"
    npz = "npz"
    parquet = "parquet"


class DebugMode(str, Enum):
    """Textual logging levels accepted by the CLI."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"
