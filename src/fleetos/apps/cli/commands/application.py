# src/fleetos/apps/cli/commands/application.py
import typer

from fleetos.apps.cli.common import echo_json, echo_table, get_fleet, run

app = typer.Typer(help="Applications: list, create, remove, restart.")


@app.command("list")
def list_applications(json_output: bool = typer.Option(False, "--json", help="Print JSON.")) -> None:
    fleet = get_fleet()
    summaries = run(fleet.application.get_all())
    if json_output:
        echo_json(
            [
                {
                    "id": item.application.id,
                    "app_name": item.application.app_name,
                    "device_type": item.application.device_type,
                    "online_devices": item.online_devices,
                    "devices_length": item.devices_length,
                }
                for item in summaries
            ]
        )
        return
    echo_table(
        ["ID", "Name", "Device type", "Online", "Devices"],
        [
            [item.application.id, item.application.app_name, item.application.device_type, item.online_devices, item.devices_length]
            for item in summaries
        ],
    )


@app.command("info")
def info(name: str = typer.Argument(..., help="Application name")) -> None:
    fleet = get_fleet()
    application = run(fleet.application.get(name))
    typer.echo(f"ID: {application.id}")
    typer.echo(f"Name: {application.app_name}")
    typer.echo(f"Device type: {application.device_type}")


@app.command("create")
def create(
    name: str = typer.Argument(..., help="Application name"),
    device_type: str = typer.Option(..., "--type", "-t", help="Device type slug or display name"),
) -> None:
    fleet = get_fleet()
    application = run(fleet.application.create(name, device_type))
    typer.secho(f"Application '{application.app_name}' created (id {application.id}).", fg=typer.colors.GREEN)


@app.command("rm")
def remove(
    name: str = typer.Argument(..., help="Application name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    if not yes:
        typer.confirm(f"Remove application '{name}'?", abort=True)
    fleet = get_fleet()
    run(fleet.application.remove(name))
    typer.secho(f"Application '{name}' removed.", fg=typer.colors.GREEN)


@app.command("restart")
def restart(name: str = typer.Argument(..., help="Application name")) -> None:
    fleet = get_fleet()
    run(fleet.application.restart(name))
    typer.secho(f"Application '{name}' restarted.", fg=typer.colors.GREEN)


@app.command("api-key")
def api_key(name: str = typer.Argument(..., help="Application name")) -> None:
    """Generate a new API key (each call issues a fresh key)."""
    fleet = get_fleet()
    key = run(fleet.application.get_api_key(name))
    typer.echo(key)
