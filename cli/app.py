from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_reading, render_status, render_upload


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for interacting with the SeaWatch service.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        typer.secho("CLI state is uninitialized.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="SeaWatch API base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for each HTTP request.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("status")
def status_command(ctx: typer.Context) -> None:
    """Show the latest reading classified per parameter, and any active alert."""
    state = _get_state(ctx)
    render_status(state.client.get_status())


@app.command("latest")
def latest_command(ctx: typer.Context) -> None:
    """Show the most recent raw reading."""
    state = _get_state(ctx)
    render_reading(state.client.get_latest())


@app.command("upload")
def upload_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Path to CSV file."),
) -> None:
    """Upload a CSV file of readings."""
    state = _get_state(ctx)
    typer.echo(f"Uploading {file} to {state.config.base_url} ...")
    payload = state.client.upload_readings(file)
    typer.secho("Upload complete.", fg=typer.colors.GREEN)
    typer.echo()
    render_upload(payload)


@app.command("classify")
def classify_command(
    ctx: typer.Context,
    parameter: str = typer.Argument(..., help="Parameter identifier, e.g. temperature or pH."),
    value: float = typer.Argument(..., help="Value to classify."),
) -> None:
    """Classify a single value against its parameter's threshold band."""
    state = _get_state(ctx)
    payload = state.client.classify(parameter, value)
    typer.echo(f"{payload.get('parameter')}={payload.get('value')} -> {payload.get('status')}")
