# kmerprofile/cli/main.py
from __future__ import annotations

import typer

from kmerprofile import __version__
from kmerprofile.cli.profile_tools import app as profile_app

app = typer.Typer(
    name="kmerprofile",
    add_completion=False,
    help="Inspect, convert, filter and compare saved k-mer profiles.",
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"kmerprofile version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """kmerprofile CLI main callback."""
    pass


app.add_typer(
    profile_app,
    name="profile",
    help="Work with profile files (show, convert, normalize, zip, join, distance, export).",
)

if __name__ == "__main__":
    app()
