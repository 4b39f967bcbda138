# src/volume_stats_exporter/cli/main.py
"""
This module is the main entry point for the exporter CLI.
"""

import typer

from . import start

app = typer.Typer(
    name="volume-stats-exporter",
    help="Republish kubelet volume statistics as Prometheus metrics.",
    add_completion=False,
)


def version_callback(value: bool):
    """
    Prints the version of the exporter.
    """
    if value:
        from .. import __version__

        typer.echo(f"kubelet-volume-stats-exporter version: {__version__}")
        raise typer.Exit()


@app.command()
def version():
    """
    Show the version of the exporter.
    """
    from .. import __version__

    typer.echo(f"kubelet-volume-stats-exporter version: {__version__}")


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
):
    """
    Kubelet volume stats exporter CLI.
    """
    pass


app.add_typer(start.app, name="start")


if __name__ == "__main__":
    app()
