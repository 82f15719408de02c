"""nbdevice CLI - drive the netbox_device lifecycle by hand.

Usage:
    nbdevice create device.yaml       # Create from a declared config
    nbdevice show 42                  # Import + read an existing device
    nbdevice update 42 device.yaml    # Apply a declared config to device 42
    nbdevice delete 42                # Delete device 42

Environment Variables:
    NETBOX_URL: NetBox server URL
    NETBOX_TOKEN: NetBox API token
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from nbdevice.client import NetBoxClient
from nbdevice.core.logging_config import setup_logging
from nbdevice.diagnostics import Diagnostics, Severity
from nbdevice.resources.device import DeviceResource
from nbdevice.schema import ResourceData

app = typer.Typer(
    name="nbdevice",
    help="Manage NetBox devices from declarative configuration",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


# ============================================
# Shared Options
# ============================================
UrlOption = Annotated[
    str | None,
    typer.Option("--url", help="NetBox URL (defaults to NETBOX_URL)", envvar="NETBOX_URL"),
]

TokenOption = Annotated[
    str | None,
    typer.Option("--token", help="NetBox API token (defaults to NETBOX_TOKEN)", envvar="NETBOX_TOKEN"),
]

VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show request payloads"),
]

JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON"),
]

ConfigArgument = Annotated[
    Path,
    typer.Argument(exists=True, dir_okay=False, readable=True, help="YAML file with the device attributes"),
]

DeviceIdArgument = Annotated[str, typer.Argument(help="NetBox device ID")]


# ============================================
# Helpers
# ============================================
def _build_resource(url: str | None, token: str | None, verbose: bool) -> DeviceResource:
    setup_logging(verbose=verbose)
    return DeviceResource(client=NetBoxClient(base_url=url, token=token))


def _load_config(resource: DeviceResource, path: Path) -> dict[str, Any]:
    """Load and validate a declared config; exits with code 1 on invalid input."""
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        console.print(f"[red]Error: {path} must contain a mapping of attributes[/red]")
        raise typer.Exit(1)
    try:
        return resource.schema.validate(raw)
    except ValidationError as e:
        console.print(f"[red]Invalid configuration in {path}:[/red]")
        for error in e.errors():
            location = ".".join(str(p) for p in error["loc"])
            console.print(f"  {location}: {error['msg']}")
        raise typer.Exit(1) from None


def _report(diags: Diagnostics) -> None:
    """Print diagnostics; exits with code 1 when any is an error."""
    for diag in diags:
        color = "red" if diag.severity == Severity.ERROR else "yellow"
        console.print(f"[{color}]{diag.severity.value.title()}: {escape(diag.summary)}[/{color}]")
        if diag.detail:
            console.print(f"  {escape(diag.detail)}")
    if diags.has_error():
        raise typer.Exit(1)


def _print_state(data: ResourceData, as_json: bool) -> None:
    state = data.state()
    state["tags"] = sorted(state["tags"])
    if as_json:
        console.print_json(json.dumps(state))
        return

    table = Table(title=f"netbox_device {state['id']}")
    table.add_column("Attribute", style="cyan")
    table.add_column("Value")
    for key, value in state.items():
        if key == "tags":
            value = ", ".join(value)
        table.add_row(key, "" if value is None else str(value))
    console.print(table)


# ============================================
# Commands
# ============================================
@app.command()
def create(
    config: ConfigArgument,
    url: UrlOption = None,
    token: TokenOption = None,
    verbose: VerboseOption = False,
    as_json: JsonOption = False,
) -> None:
    """Create a device from a YAML attribute file."""
    resource = _build_resource(url, token, verbose)
    data = ResourceData(resource.schema, config=_load_config(resource, config))
    _report(resource.create(data))
    _print_state(data, as_json)


@app.command()
def show(
    device_id: DeviceIdArgument,
    url: UrlOption = None,
    token: TokenOption = None,
    verbose: VerboseOption = False,
    as_json: JsonOption = False,
) -> None:
    """Import a device by ID and show its attributes."""
    resource = _build_resource(url, token, verbose)
    data, diags = resource.import_state(device_id)
    _report(diags)
    _print_state(data, as_json)


@app.command()
def update(
    device_id: DeviceIdArgument,
    config: ConfigArgument,
    url: UrlOption = None,
    token: TokenOption = None,
    verbose: VerboseOption = False,
    as_json: JsonOption = False,
) -> None:
    """Apply a YAML attribute file to an existing device."""
    resource = _build_resource(url, token, verbose)
    declared = _load_config(resource, config)

    current, diags = resource.import_state(device_id)
    _report(diags)

    data = ResourceData(resource.schema, config=declared, state=current.state(), id=current.id)
    _report(resource.update(data))
    if not data.id:
        console.print(f"[yellow]Device {device_id} disappeared after update[/yellow]")
        raise typer.Exit(1)
    _print_state(data, as_json)


@app.command()
def delete(
    device_id: DeviceIdArgument,
    url: UrlOption = None,
    token: TokenOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Delete a device by ID."""
    resource = _build_resource(url, token, verbose)
    data = ResourceData(resource.schema, id=device_id)
    _report(resource.delete(data))
    console.print(f"[green]Deleted device {device_id}[/green]")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
