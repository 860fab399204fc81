# src/fleetos/apps/cli/commands/device.py
from typing import List, Optional

import typer

from fleetos.apps.cli.common import echo_json, echo_table, get_fleet, run
from fleetos.services.api.models import DeviceDetails

app = typer.Typer(help="Devices: inspect, register, rename, move, restart.")


def _rows(items: List[DeviceDetails]) -> list[list]:
    return [
        [
            item.device.id,
            item.device.uuid[:7],
            item.device.name,
            item.device.device_type,
            item.application_name,
            "online" if item.device.is_online else "offline",
        ]
        for item in items
    ]


def _as_dict(item: DeviceDetails) -> dict:
    device = item.device
    return {
        "id": device.id,
        "uuid": device.uuid,
        "name": device.name,
        "device_type": device.device_type,
        "application_name": item.application_name,
        "is_online": device.is_online,
        "ip_address": device.ip_address,
        "is_web_accessible": device.is_web_accessible,
        "note": device.note,
    }


@app.command("list")
def list_devices(
    application: Optional[str] = typer.Option(None, "--app", "-a", help="Only devices of this application"),
    json_output: bool = typer.Option(False, "--json", help="Print JSON."),
) -> None:
    fleet = get_fleet()
    if application:
        items = run(fleet.device.get_all_by_application(application))
    else:
        items = run(fleet.device.get_all())
    if json_output:
        echo_json([_as_dict(item) for item in items])
        return
    echo_table(["ID", "UUID", "Name", "Device type", "Application", "Status"], _rows(items))


@app.command("info")
def info(uuid: str = typer.Argument(..., help="Device uuid")) -> None:
    fleet = get_fleet()
    item = run(fleet.device.get(uuid))
    for key, value in _as_dict(item).items():
        typer.echo(f"{key}: {'-' if value is None else value}")


@app.command("find")
def find(name: str = typer.Argument(..., help="Device name")) -> None:
    fleet = get_fleet()
    items = run(fleet.device.get_by_name(name))
    echo_table(["ID", "UUID", "Name", "Device type", "Application", "Status"], _rows(items))


@app.command("register")
def register(
    application: str = typer.Argument(..., help="Application name"),
    uuid: Optional[str] = typer.Option(None, "--uuid", help="Use this uuid instead of generating one"),
) -> None:
    fleet = get_fleet()
    uuid = uuid or fleet.device.generate_uuid()
    device = run(fleet.device.register(application, uuid))
    typer.secho(f"Device registered: {device.uuid}", fg=typer.colors.GREEN)


@app.command("rm")
def remove(
    uuid: str = typer.Argument(..., help="Device uuid"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    if not yes:
        typer.confirm(f"Remove device {uuid}?", abort=True)
    fleet = get_fleet()
    run(fleet.device.remove(uuid))
    typer.secho(f"Device {uuid} removed.", fg=typer.colors.GREEN)


@app.command("identify")
def identify(uuid: str = typer.Argument(..., help="Device uuid")) -> None:
    fleet = get_fleet()
    run(fleet.device.identify(uuid))
    typer.echo(f"Identification request sent to {uuid}.")


@app.command("rename")
def rename(
    uuid: str = typer.Argument(..., help="Device uuid"),
    new_name: str = typer.Argument(..., help="New device name"),
) -> None:
    fleet = get_fleet()
    run(fleet.device.rename(uuid, new_name))
    typer.secho(f"Device {uuid} renamed to '{new_name}'.", fg=typer.colors.GREEN)


@app.command("note")
def note(
    uuid: str = typer.Argument(..., help="Device uuid"),
    text: str = typer.Argument(..., help="Note text"),
) -> None:
    fleet = get_fleet()
    run(fleet.device.note(uuid, text))


@app.command("move")
def move(
    uuid: str = typer.Argument(..., help="Device uuid"),
    application: str = typer.Argument(..., help="Target application name"),
) -> None:
    fleet = get_fleet()
    run(fleet.device.move(uuid, application))
    typer.secho(f"Device {uuid} moved to '{application}'.", fg=typer.colors.GREEN)


@app.command("restart")
def restart(uuid: str = typer.Argument(..., help="Device uuid")) -> None:
    fleet = get_fleet()
    body = run(fleet.device.restart(uuid))
    if isinstance(body, str):
        typer.echo(body)
    elif body:
        echo_json(body)


@app.command("ips")
def local_ips(uuid: str = typer.Argument(..., help="Device uuid")) -> None:
    fleet = get_fleet()
    for address in run(fleet.device.get_local_ip_addresses(uuid)):
        typer.echo(address)


@app.command("url")
def url(
    uuid: str = typer.Argument(..., help="Device uuid"),
    enable: bool = typer.Option(False, "--enable", help="Make the device web accessible"),
    disable: bool = typer.Option(False, "--disable", help="Turn off web access"),
) -> None:
    if enable and disable:
        raise typer.BadParameter("--enable and --disable are mutually exclusive")
    fleet = get_fleet()
    if enable:
        run(fleet.device.enable_device_url(uuid))
    elif disable:
        run(fleet.device.disable_device_url(uuid))
        typer.echo(f"Device URL disabled for {uuid}.")
        return
    typer.echo(run(fleet.device.get_device_url(uuid)))
