# src/kubesummary/cli/main.py
"""
This module is the main entry point for the kube-summary-exporter CLI.

It aggregates all commands from the submodules.
"""

import logging

import typer

from . import serve

logger = logging.getLogger(__name__)


app = typer.Typer(
    name="kube-summary-exporter",
    help="Export kubelet /stats/summary filesystem usage as Prometheus metrics.",
    add_completion=False,
)


def version_callback(value: bool):
    """
    Prints the version of kube-summary-exporter.
    """
    if value:
        from .. import __version__

        typer.echo(f"kube-summary-exporter version: {__version__}")
        raise typer.Exit()


@app.command()
def version():
    """
    Show the version of kube-summary-exporter.
    """
    from .. import __version__

    typer.echo(f"kube-summary-exporter version: {__version__}")


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
    kube-summary-exporter CLI main entry point.
    """
    pass


# Register command sub-apps
app.add_typer(serve.app, name="serve")


if __name__ == "__main__":
    app()
