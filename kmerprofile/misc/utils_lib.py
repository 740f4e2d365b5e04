# utils_lib.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Literal, Optional, Sequence, Union

import numpy as np
import pandas as pd

from kmerprofile.core.errors import InvalidArgumentError

if TYPE_CHECKING:
    from kmerprofile.profile import Profile

_LOG = logging.getLogger("kmerprofile.misc.utils")


class UtilsLib:
    """
    Helpers shared by the profile API and the CLI.

    Features
    --------
    • Rank-distance matrices between a set of query profiles and a reference set.
    • Table export to CSV/NPY/NPZ/Parquet.

    Notes
    -----
    Class methods only, so they can be used without instantiation.
    """

    # -------------------------------------------------------------------------
    # Distances
    # -------------------------------------------------------------------------
    @classmethod
    def rank_distance_matrix(
        cls,
        queries: Sequence["Profile"],
        references: Optional[Sequence["Profile"]] = None,
    ) -> pd.DataFrame:
        """
        Rank distance from every query profile to every reference profile.

        Parameters
        ----------
        queries : Sequence[Profile]
            Row profiles. Must be sorted by the caller.
        references : Sequence[Profile], optional
            Column profiles. Defaults to `queries` (all-vs-all).

        Returns
        -------
        pd.DataFrame
            ``df.loc[q, r] == q.get_distance(r)`` with profile identifiers as
            index and columns. The matrix is not symmetric in general.

        Raises
        ------
        InvalidArgumentError
            If there are no queries/references or any profile is empty.
        """
        refs = list(queries if references is None else references)
        rows = list(queries)
        if not rows or not refs:
            raise InvalidArgumentError("At least one query and one reference profile are required.")

        values = np.empty((len(rows), len(refs)), dtype=np.float64)
        for i, query in enumerate(rows):
            for j, ref in enumerate(refs):
                values[i, j] = query.get_distance(ref)

        _LOG.info("Computed rank distances for %d x %d profiles.", len(rows), len(refs))
        return pd.DataFrame(
            values,
            index=pd.Index([p.profile_id for p in rows], name="query"),
            columns=pd.Index([p.profile_id for p in refs], name="reference"),
        )

    # -------------------------------------------------------------------------
    # Export helpers
    # -------------------------------------------------------------------------
    @classmethod
    def export_data(
        cls,
        df_encoded: pd.DataFrame,
        path: Union[str, Path],
        *,
        base_message: str = "Profile table",
        file_format: Optional[Literal["csv", "npy", "npz", "parquet"]] = None,
        overwrite: bool = True,
    ) -> Path:
        """
        Persist a table to disk.

        Parameters
        ----------
        df_encoded : pd.DataFrame
            Data to export.
        path : str | Path
            Destination path. If `file_format` is None, the format is inferred from suffix.
        base_message : str, default="Profile table"
            Human-readable label for logging messages.
        file_format : {"csv","npy","npz","parquet"} or None, optional
            Output format. If None, inferred from file suffix; default CSV if no suffix.
        overwrite : bool, default=True
            If False and the target exists, raise a FileExistsError.

        Returns
        -------
        Path
            The actual file path written.

        Raises
        ------
        ValueError
            If the format is unsupported.
        FileExistsError
            If `overwrite=False` and destination exists.
        """
        dest = Path(path).expanduser()
        suffix = dest.suffix.lower()
        if file_format is None:
            if suffix in {".csv", ".npy", ".npz", ".parquet"}:
                file_format = suffix.lstrip(".")  # type: ignore[assignment]
            else:
                file_format = "csv"

        if file_format not in {"csv", "npy", "npz", "parquet"}:
            raise ValueError(f"Unsupported file format '{file_format}'.")

        dest.parent.mkdir(parents=True, exist_ok=True)
        if dest.exists() and not overwrite:
            raise FileExistsError(f"Destination exists: {dest}")

        try:
            if file_format == "csv":
                df_encoded.to_csv(dest, index=False)
            elif file_format == "npy":
                np.save(dest, df_encoded.values, allow_pickle=True)
            elif file_format == "npz":
                # Column names travel with the values
                np.savez_compressed(dest, values=df_encoded.values, columns=df_encoded.columns.to_numpy())
            else:
                # Requires pyarrow or fastparquet installed
                df_encoded.to_parquet(dest, index=False)
        except Exception as e:
            _LOG.error("Failed to export %s to %s (%s): %s", base_message, dest, file_format, e)
            raise

        _LOG.info("%s exported to %s: %s", base_message, str(file_format).upper(), dest)
        return dest
