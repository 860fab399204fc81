# src/fleetos/apps/cli/commands/config.py
import typer

from fleetos.apps.cli.common import echo_json
from fleetos.services.settings import config_path, load_settings, save_settings

app = typer.Typer(help="Local configuration (config.yaml).")

_KEYS = {
    "api.base_url": ("api", "base_url"),
    "api.prefix": ("api", "prefix"),
    "auth.token": ("auth", "token"),
    "devices.urls_base": ("devices", "urls_base"),
}


@app.command("show")
def show() -> None:
    settings = load_settings()
    data = settings.to_dict()
    if data["auth"].get("token"):
        data["auth"]["token"] = "***"
    typer.echo(f"# {config_path()}")
    echo_json(data)


@app.command("set")
def set_value(
    key: str = typer.Argument(..., help=f"One of: {', '.join(_KEYS)}"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    if key not in _KEYS:
        raise typer.BadParameter(f"unknown key {key!r}; expected one of: {', '.join(_KEYS)}")
    settings = load_settings(env=False)
    section, attr = _KEYS[key]
    setattr(getattr(settings, section), attr, value or None)
    path = save_settings(settings)
    typer.secho(f"{key} saved to {path}", fg=typer.colors.GREEN)
