# src/fleetos/apps/cli/commands/device_type.py
from typing import Optional

import typer

from fleetos.apps.cli.common import echo_json, echo_table, get_fleet, run

app = typer.Typer(help="Supported device types.")


@app.command("list")
def list_device_types(json_output: bool = typer.Option(False, "--json", help="Print JSON.")) -> None:
    fleet = get_fleet()
    manifests = run(fleet.catalog.get_device_types())
    if json_output:
        echo_json([{"slug": m.slug, "name": m.name} for m in manifests])
        return
    echo_table(["Slug", "Name"], [[m.slug, m.name] for m in manifests])


@app.command("slug")
def slug(name: str = typer.Argument(..., help="Display name or slug")) -> None:
    fleet = get_fleet()
    value = run(fleet.device.get_device_slug(name))
    if value is None:
        typer.secho(f"Unknown device type: {name}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    typer.echo(value)


@app.command("manifest")
def manifest(
    slug: Optional[str] = typer.Option(None, "--slug", help="Device type slug"),
    application: Optional[str] = typer.Option(None, "--app", help="Resolve via this application"),
) -> None:
    if bool(slug) == bool(application):
        raise typer.BadParameter("pass exactly one of --slug or --app")
    fleet = get_fleet()
    if slug:
        found = run(fleet.device.get_manifest_by_slug(slug))
    else:
        found = run(fleet.device.get_manifest_by_application(application))
    echo_json(dict(found.raw))
