from __future__ import annotations

from typing import Any, Dict, Iterable

import typer

_STATUS_COLORS = {
    "low": typer.colors.YELLOW,
    "normal": typer.colors.GREEN,
    "high": typer.colors.RED,
}


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_status(payload: Dict[str, Any]) -> None:
    echo_heading("Current Readings")
    typer.echo(f"Last updated: {payload.get('timestamp')}")
    for metric in payload.get("metrics") or []:
        unit = metric.get("unit") or ""
        value = f"{metric.get('value')} {unit}".strip()
        status = metric.get("status")
        typer.echo(f"  - {metric.get('label')}: {value} ", nl=False)
        typer.secho(f"[{status}]", fg=_STATUS_COLORS.get(status))

    alert = payload.get("alert") or {}
    if alert.get("active"):
        typer.echo()
        typer.secho(alert.get("title") or "Alert", fg=typer.colors.RED, bold=True)
        typer.echo(alert.get("message") or "")


def render_reading(payload: Dict[str, Any]) -> None:
    echo_heading("Latest Reading")
    echo_key_values(
        [
            ("timestamp", payload.get("timestamp")),
            ("temperature", payload.get("temperature")),
            ("salinity", payload.get("salinity")),
            ("oxygen", payload.get("oxygen")),
            ("turbidity", payload.get("turbidity")),
            ("pH", payload.get("pH")),
        ]
    )


def render_upload(payload: Dict[str, Any]) -> None:
    echo_heading("Upload Result")
    echo_key_values([("accepted", payload.get("accepted"))])

    errors = payload.get("errors") or []
    typer.echo()
    echo_heading("Errors")
    if errors:
        for error in errors:
            typer.echo(f"  - row {error.get('row_number')}: {error.get('reason')}")
    else:
        typer.echo("No errors recorded.")
