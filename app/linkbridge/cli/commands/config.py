"""Configuration inspection command."""

import json

import typer

from linkbridge.cli.types import require_config
from linkbridge.core.paths import get_config_path
from linkbridge.utils.formatting import console, print_info

app = typer.Typer(
    help="Inspect configuration.",
    no_args_is_help=True,
)

_MASK = "********"


@app.command()
def show(ctx: typer.Context) -> None:
    """Print the effective configuration (API keys masked)."""
    config = require_config(ctx)

    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    source = obj.get("config_path") or get_config_path()
    print_info(f"Config file: {source}")

    data = config.model_dump()
    if data["catalog"]["api_key"]:
        data["catalog"]["api_key"] = _MASK
    console.print_json(json.dumps(data))
