from __future__ import annotations

import typer

from fleetos.services.logging import setup_logging

from .commands import application, config, device, device_type

app = typer.Typer(help="Manage applications and devices of a fleet.", no_args_is_help=True)
app.add_typer(application.app, name="app")
app.add_typer(device.app, name="device")
app.add_typer(device_type.app, name="device-type")
app.add_typer(config.app, name="config")


@app.callback()
def _main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log API requests to stderr."),
    log_json: bool = typer.Option(False, "--log-json", help="Emit logs as JSON lines."),
) -> None:
    setup_logging("DEBUG" if verbose else "WARNING", json_output=log_json)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
