"""Serve command implementation.

Runs the HTTP API under uvicorn.
"""

import logging
from typing import Annotated

import typer
import uvicorn

from linkbridge.api.server import create_app
from linkbridge.cli.types import require_config

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Run the HTTP API.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def serve(
    ctx: typer.Context,
    host: Annotated[
        str | None,
        typer.Option("--host", help="Interface to bind (default: server.host)."),
    ] = None,
    port: Annotated[
        int | None,
        typer.Option("--port", "-p", help="Port to listen on (default: server.port)."),
    ] = None,
) -> None:
    """Run the HTTP API server."""
    config = require_config(ctx)
    bind_host = host or config.server.host
    bind_port = port or config.server.port

    verbose = bool(ctx.obj.get("verbose")) if isinstance(ctx.obj, dict) else False

    logger.info("Starting linkbridge on %s:%d", bind_host, bind_port)
    uvicorn.run(
        create_app(config),
        host=bind_host,
        port=bind_port,
        log_level="info" if verbose else "warning",
    )
