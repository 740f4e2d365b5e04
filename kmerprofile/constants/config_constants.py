# config_constants.py
import threading
from dataclasses import dataclass
from pathlib import Path

# Thread-safe creation of cache directories
_LOCK = threading.RLock()


@dataclass
class CachePaths:
    """
    Helper to manage the kmerprofile cache layout and ensure directories exist.
    """
    cache_root: Path
    tool_name: str = "kmerprofile"

    def base(self) -> Path:
        return self.cache_root / self.tool_name

    def profiles(self) -> Path:
        """Default location for profiles saved without an explicit directory."""
        return self.base() / "profiles"

    def tmp(self) -> Path:
        return self.base() / "tmp"

    def logs(self) -> Path:
        return self.base() / "logs"

    def ensure_all(self) -> None:
        """
        Create the common cache directories if they do not exist.
        """
        with _LOCK:
            for p in [self.base(), self.profiles(), self.tmp(), self.logs()]:
                p.mkdir(parents=True, exist_ok=True)
