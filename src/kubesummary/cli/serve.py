# src/kubesummary/cli/serve.py
"""
Serve command for the kube-summary-exporter CLI.

Starts the HTTP server exposing /node/{node}, /nodes and /metrics.
"""

import logging
import traceback
from typing import Optional

import typer
from typing_extensions import Annotated

from ..api import app as api_app
from ..core.config import config

logger = logging.getLogger(__name__)

app = typer.Typer(name="serve", help="Start the metrics HTTP server.")


@app.callback(invoke_without_command=True)
def serve(
    ctx: typer.Context,
    listen_address: Annotated[
        Optional[str],
        typer.Option("--listen-address", help="Listen address, e.g. ':9779' or '127.0.0.1:9779'."),
    ] = None,
    kubeconfig: Annotated[
        Optional[str],
        typer.Option(
            "--kubeconfig",
            help="Path of a kubeconfig file. If not provided the app will try in-cluster config, "
            "$KUBECONFIG or $HOME/.kube/config.",
        ),
    ] = None,
) -> None:
    """
    Load the Kubernetes configuration and serve metrics until interrupted.
    """
    if ctx.invoked_subcommand is not None:
        return

    address = listen_address or config.LISTEN_ADDRESS
    try:
        config.split_listen_address(address)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    if kubeconfig:
        config.KUBECONFIG_PATH = kubeconfig

    try:
        api_app.main(listen_address=address)
    except KeyboardInterrupt:
        logger.info("Shutting down kube-summary-exporter.")
    except Exception as e:
        logger.error(f"An unexpected error occurred while serving: {e}")
        logger.error("Server failed: %s", traceback.format_exc())
        raise typer.Exit(code=1)
