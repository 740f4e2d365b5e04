"""kmerprofile/cli/profile_tools.py

CLI over saved profile files (text ``MP-KMER-T-1.0`` or binary ``MP-KMER-B-1.0``):
- show       print identifier, size and the top pairs
- convert    rewrite a profile in text or binary form
- normalize  canonicalize symbols and merge duplicates
- zip        drop rare pairs and/or pairs with missing symbols
- join       merge several profiles into one
- distance   rank-distance matrix between query and reference profiles
- export     write a profile as csv/npy/npz/parquet
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from kmerprofile.constants.cli_constants import DebugMode, ExportOption, SaveMode
from kmerprofile.core.errors import ProfileError
from kmerprofile.logging import set_global_level
from kmerprofile.profile import Profile

app = typer.Typer(
    name="profile",
    help="Inspect and transform saved k-mer profiles.",
    no_args_is_help=True,
)

_console = Console()


@app.callback()
def _profile_callback(
    log_level: DebugMode = typer.Option(DebugMode.INFO, "--log-level", help="Logging level.", show_default=True),
) -> None:
    set_global_level(log_level.value)


# ----------------------------
# Helpers
# ----------------------------

def _load(path: Path) -> Profile:
    if not path.exists():
        raise typer.BadParameter(f"Profile file not found: {path}")
    return Profile.from_file(path)


def _fail(exc: Exception) -> typer.Exit:
    if isinstance(exc, (typer.BadParameter, ProfileError)):
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        return typer.Exit(code=2)
    typer.secho(f"Unexpected error: {exc}", fg=typer.colors.RED, err=True)
    return typer.Exit(code=1)


def _pairs_table(profile: Profile, limit: Optional[int]) -> Table:
    table = Table(title=f"{profile.profile_id} ({profile.size} kmers)", box=box.SIMPLE_HEAVY)
    table.add_column("Rank", justify="right")
    table.add_column("Kmer", style="cyan")
    table.add_column("Frequency", justify="right")
    shown = profile.size if limit is None else min(limit, profile.size)
    for rank in range(shown):
        pair = profile[rank]
        table.add_row(str(rank), pair.kmer.text, str(pair.frequency))
    return table


# ----------------------------
# Commands
# ----------------------------

@app.command("show")
def show(
    input_path: Path = typer.Argument(..., help="Profile file."),
    limit: Optional[int] = typer.Option(20, "--limit", "-n", help="Pairs to display (all if omitted with 0)."),
    sort: bool = typer.Option(False, "--sort/--no-sort", help="Sort the pairs before displaying."),
) -> None:
    """Print a profile as a table."""
    try:
        profile = _load(input_path)
        if sort:
            profile.sort()
        _console.print(_pairs_table(profile, limit or None))
    except Exception as e:
        raise _fail(e)


@app.command("convert")
def convert(
    input_path: Path = typer.Argument(..., help="Profile file to read."),
    output: Path = typer.Argument(..., help="Destination profile file."),
    mode: SaveMode = typer.Option(SaveMode.binary, "--mode", "-m", help="Output format: t (text) or b (binary)."),
) -> None:
    """Rewrite a profile in text or binary form."""
    try:
        profile = _load(input_path)
        profile.save(output, mode.value)
        typer.echo(f"[convert] Saved to: {output}")
    except Exception as e:
        raise _fail(e)


@app.command("normalize")
def normalize(
    input_path: Path = typer.Argument(..., help="Profile file to read."),
    output: Path = typer.Argument(..., help="Destination profile file."),
    valid_nucleotides: Optional[str] = typer.Option(
        None, "--valid", help="Valid symbols (defaults to the configured alphabet)."
    ),
    sort: bool = typer.Option(True, "--sort/--no-sort", help="Sort after normalizing."),
    mode: SaveMode = typer.Option(SaveMode.text, "--mode", "-m", help="Output format: t (text) or b (binary)."),
) -> None:
    """Uppercase k-mers, mask invalid symbols and merge duplicates."""
    try:
        profile = _load(input_path)
        before = profile.size
        profile.normalize(valid_nucleotides)
        if sort:
            profile.sort()
        profile.save(output, mode.value)
        typer.echo(f"[normalize] {before} -> {profile.size} kmers. Saved to: {output}")
    except Exception as e:
        raise _fail(e)


@app.command("zip")
def zip_profile(
    input_path: Path = typer.Argument(..., help="Profile file to read."),
    output: Path = typer.Argument(..., help="Destination profile file."),
    delete_missing: bool = typer.Option(
        False, "--delete-missing/--keep-missing", help="Drop kmers holding a missing symbol."
    ),
    lower_bound: int = typer.Option(0, "--lower-bound", "-l", help="Drop kmers with frequency <= this value."),
    mode: SaveMode = typer.Option(SaveMode.text, "--mode", "-m", help="Output format: t (text) or b (binary)."),
) -> None:
    """Remove rare pairs and, optionally, pairs with missing symbols."""
    try:
        profile = _load(input_path)
        before = profile.size
        profile.zip(delete_missing=delete_missing, lower_bound=lower_bound)
        profile.save(output, mode.value)
        typer.echo(f"[zip] {before} -> {profile.size} kmers. Saved to: {output}")
    except Exception as e:
        raise _fail(e)


@app.command("join")
def join(
    inputs: List[Path] = typer.Argument(..., help="Profile files to merge, in order."),
    output: Path = typer.Option(..., "--output", "-o", help="Destination profile file."),
    profile_id: Optional[str] = typer.Option(None, "--profile-id", help="Identifier of the merged profile."),
    sort: bool = typer.Option(True, "--sort/--no-sort", help="Sort the merged profile."),
    mode: SaveMode = typer.Option(SaveMode.text, "--mode", "-m", help="Output format: t (text) or b (binary)."),
) -> None:
    """Merge profiles: frequencies of shared kmers are added."""
    try:
        merged = _load(inputs[0])
        for path in inputs[1:]:
            merged += _load(path)
        if profile_id:
            merged.profile_id = profile_id
        if sort:
            merged.sort()
        merged.save(output, mode.value)
        typer.echo(f"[join] {len(inputs)} profiles -> {merged.size} kmers. Saved to: {output}")
    except Exception as e:
        raise _fail(e)


@app.command("distance")
def distance(
    queries: List[Path] = typer.Argument(..., help="Query profile files."),
    references: Optional[List[Path]] = typer.Option(
        None, "--reference", "-r", help="Reference profile file (repeatable). Defaults to the queries."
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also write the matrix as CSV."),
) -> None:
    """Rank distance from each query to each reference (profiles are sorted first)."""
    from kmerprofile.misc.utils_lib import UtilsLib

    try:
        query_profiles = [_load(p) for p in queries]
        ref_profiles = [_load(p) for p in references] if references else query_profiles
        for profile in {id(p): p for p in query_profiles + ref_profiles}.values():
            profile.sort()

        matrix = UtilsLib.rank_distance_matrix(query_profiles, ref_profiles)

        table = Table(title="Rank distance", box=box.SIMPLE_HEAVY)
        table.add_column("query \\ reference")
        for col in matrix.columns:
            table.add_column(str(col), justify="right")
        for name, row in matrix.iterrows():
            table.add_row(str(name), *[f"{v:.6f}" for v in row.to_numpy()])
        _console.print(table)

        if output is not None:
            matrix.to_csv(output)
            typer.echo(f"[distance] Saved to: {output}")
    except Exception as e:
        raise _fail(e)


@app.command("export")
def export(
    input_path: Path = typer.Argument(..., help="Profile file to read."),
    output: Path = typer.Argument(..., help="Output table path (extension can be omitted)."),
    format_output: ExportOption = typer.Option(ExportOption.csv, "--format-output", "-f", help="Output format."),
) -> None:
    """Export a profile as a kmer/frequency/rank table."""
    try:
        profile = _load(input_path)
        final_output = output if output.suffix else output.with_suffix(f".{format_output.value}")
        dest = profile.export(final_output, file_format=format_output.value)
        typer.echo(f"[export] Saved to: {dest}")
    except Exception as e:
        raise _fail(e)
