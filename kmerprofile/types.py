from __future__ import annotations

from typing import Literal

FileFormat = Literal["csv", "npy", "npz", "parquet"]
SaveModeChar = Literal["t", "b"]
