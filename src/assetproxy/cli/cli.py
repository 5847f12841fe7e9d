"""Main CLI entry point for the asset manager proxy"""
import os

import asyncclick as click
from dotenv import load_dotenv
from pydantic import ValidationError

from assetproxy import __version__

load_dotenv(dotenv_path=os.path.join(os.getcwd(), ".env"))

from assetproxy.shared.logging import get_logger, replace_uvicorn_loggers  # noqa: E402
from assetproxy.shared.settings import ProxySettings, proxy_settings  # noqa: E402

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="assetproxy")
def cli() -> None:
    """Serve plugin-provided asset managers to remote callers."""
    pass


@cli.command(name="serve")
@click.option(
    "--host",
    type=str,
    default=None,
    help="Address to bind to (default: ASSETPROXY_HOST or 0.0.0.0)"
)
@click.option(
    "--port",
    type=int,
    default=None,
    help="Port to listen on (default: ASSETPROXY_PORT or 50051)"
)
@click.option(
    "--plugin-path",
    "plugin_paths",
    multiple=True,
    type=click.Path(file_okay=False),
    help="Manager plugin search directory; repeat to add more. Overrides ASSETPROXY_PLUGIN_PATH"
)
@click.option(
    "--strict-destroy/--lenient-destroy",
    default=None,
    help="Whether Destroy of an unknown handle fails (default: ASSETPROXY_STRICT_DESTROY)"
)
async def serve(
        host: str | None,
        port: int | None,
        plugin_paths: tuple[str, ...],
        strict_destroy: bool | None
) -> None:
    """Run the manager proxy server until interrupted"""
    from assetproxy.server import ManagerProxyServer

    overrides = {
        key: value for key, value in {
            "host": host,
            "port": port,
            "plugin_path": os.pathsep.join(plugin_paths) if plugin_paths else None,
            "strict_destroy": strict_destroy,
        }.items() if value is not None
    }
    try:
        settings = ProxySettings.model_validate({**proxy_settings.model_dump(), **overrides})
    except ValidationError as ex:
        raise click.ClickException(f"Invalid server settings: {ex}")

    try:
        replace_uvicorn_loggers(suppress_startup_logs=True)
        server = ManagerProxyServer.from_settings(settings)
        await server.start(port=settings.port, host=settings.host)
    except Exception as ex:
        logger.exception(f"Failed to start server: {ex}")
        raise click.ClickException(f"Unable to start manager proxy: {ex}")


@cli.command(name="identifiers")
@click.option(
    "--plugin-path",
    "plugin_paths",
    multiple=True,
    type=click.Path(file_okay=False),
    help="Manager plugin search directory; repeat to add more. Overrides ASSETPROXY_PLUGIN_PATH"
)
def identifiers(plugin_paths: tuple[str, ...]) -> None:
    """List the manager identifiers the server would expose"""
    from assetproxy.plugins import PluginSystem

    paths = list(plugin_paths) or proxy_settings.plugin_paths
    plugin_system = PluginSystem()
    for identifier in plugin_system.scan(paths, use_entry_points=not proxy_settings.disable_entrypoint_plugins):
        click.echo(identifier)


if __name__ == "__main__":
    cli()
