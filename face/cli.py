"""face: agent status dashboard server."""

import logging
from typing import Annotated

import typer

from face.core.dashboard import DEFAULT_AGENT_CONFIG
from face.lib import config, paths, store
from face.lib.store import JsonStore

app = typer.Typer(
    invoke_without_command=True,
    add_completion=False,
    help="Real-time status dashboard for a fleet of agents.",
)


@app.callback(context_settings={"help_option_names": ["-h", "--help"]})
def main_callback(ctx: typer.Context):
    if ctx.resilient_parsing:
        return
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


@app.command("init")
def init():
    """Seed config.yaml and an empty agents.json in the data dir."""
    if config.init_config():
        typer.echo(f"Created {paths.config_file()}")
    else:
        typer.echo(f"Exists  {paths.config_file()}")

    documents = JsonStore(paths.data_dir())
    if documents.exists(store.CONFIG):
        typer.echo(f"Exists  {documents.path(store.CONFIG)}")
    else:
        documents.save(store.CONFIG, DEFAULT_AGENT_CONFIG)
        typer.echo(f"Created {documents.path(store.CONFIG)}")


@app.command("serve")
def serve(
    host: Annotated[str | None, typer.Option("--host", help="Bind address.")] = None,
    port: Annotated[int | None, typer.Option("--port", "-p", help="Listen port.")] = None,
    reload: Annotated[bool, typer.Option("--reload", help="Restart on code changes.")] = False,
):
    """Run the HTTP + WebSocket server."""
    import uvicorn

    cfg = config.load_config()
    logging.basicConfig(level=cfg.log_level, format="[face] %(levelname)s %(name)s: %(message)s")

    host = host or cfg.host
    port = port or cfg.port
    typer.echo(f"Dashboard API: http://{host}:{port}/api  live: ws://{host}:{port}/ws")
    typer.echo(f"Data dir:      {cfg.data_dir}")
    uvicorn.run(
        "face.api.main:app",
        host=host,
        port=port,
        access_log=False,
        reload=reload,
        log_level=cfg.log_level.lower(),
    )


def main():
    app()


if __name__ == "__main__":
    main()
