# src/volume_stats_exporter/cli/start.py
"""
Start command for the exporter CLI.

Builds the settings from the environment plus command line overrides,
then runs the collection loop and the metrics server on one event loop
until SIGINT/SIGTERM.
"""

import asyncio
import copy
import logging
import signal
import traceback
from typing import Optional

import typer
from typing_extensions import Annotated

from ..api.app import create_app
from ..api.server import bind_socket, create_server
from ..collectors.kubelet_collector import KubeletSummaryCollector
from ..core.collection import VolumeStatsCollection
from ..core.config import Config, config
from ..core.exceptions import PortBindError
from ..core.registry import VolumeStatsRegistry
from ..core.scheduler import Scheduler

logger = logging.getLogger(__name__)

app = typer.Typer(name="start", help="Start the kubelet volume stats exporter.")


def build_settings(
    kubelet_endpoint: Optional[str] = None,
    metrics_host: Optional[str] = None,
    metrics_port: Optional[int] = None,
    scrape_interval: Optional[str] = None,
    token_path: Optional[str] = None,
    insecure_skip_tls_verify: Optional[bool] = None,
    debug: Optional[bool] = None,
    log_level: Optional[str] = None,
    ready_requires_scrape: Optional[bool] = None,
) -> Config:
    """
    Returns a copy of the environment config with every given option applied.
    """
    settings = copy.copy(config)
    overrides = {
        "KUBELET_ENDPOINT": kubelet_endpoint,
        "METRICS_HOST": metrics_host,
        "METRICS_PORT": metrics_port,
        "SCRAPE_INTERVAL": scrape_interval,
        "TOKEN_PATH": token_path,
        "INSECURE_SKIP_TLS_VERIFY": insecure_skip_tls_verify,
        "DEBUG": debug,
        "LOG_LEVEL": log_level,
        "READY_REQUIRES_SUCCESSFUL_SCRAPE": ready_requires_scrape,
    }
    for key, value in overrides.items():
        if value is not None:
            setattr(settings, key, value)
    settings.validate_instance()
    return settings


async def _async_start(settings: Config) -> None:
    """
    Runs the exporter until the metrics server shuts down.
    """
    sock = bind_socket(settings.METRICS_HOST, settings.METRICS_PORT)

    registry = VolumeStatsRegistry(prefix=settings.METRIC_PREFIX)
    collector = KubeletSummaryCollector(settings)
    collection = VolumeStatsCollection(collector, registry, endpoint=settings.KUBELET_ENDPOINT)
    server = create_server(create_app(registry, settings), settings)
    scheduler = Scheduler()

    def signal_handler(signum, frame):
        """Handle SIGTERM and SIGINT for graceful shutdown."""
        sig_name = "SIGTERM" if signum == signal.SIGTERM else "SIGINT"
        logger.info(f"Received {sig_name}, initiating graceful shutdown...")
        server.should_exit = True

    # uvicorn captures these while serving and hands them back afterwards.
    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    try:
        scheduler.add_job(collection.collect_once, settings.SCRAPE_INTERVAL_SECONDS, run_immediately=True)
        logger.info(f"Starting metrics server on {settings.METRICS_HOST}:{settings.METRICS_PORT}")
        await server.serve(sockets=[sock])
    finally:
        logger.info("Shutting down gracefully...")
        await scheduler.stop()
        await collector.close()
        sock.close()
        logger.info("Shutdown complete")


@app.callback(invoke_without_command=True)
def start(
    ctx: typer.Context,
    kubelet_endpoint: Annotated[
        Optional[str], typer.Option("--kubelet-endpoint", help="Kubelet endpoint URL.")
    ] = None,
    metrics_host: Annotated[
        Optional[str], typer.Option("--metrics-host", help="Address to expose Prometheus metrics on.")
    ] = None,
    metrics_port: Annotated[
        Optional[int], typer.Option("--metrics-port", help="Port to expose Prometheus metrics on.")
    ] = None,
    scrape_interval: Annotated[
        Optional[str], typer.Option("--scrape-interval", help="Interval to scrape kubelet stats (e.g. '30s', '1m').")
    ] = None,
    token_path: Annotated[
        Optional[str], typer.Option("--token-path", help="Path to the service account token.")
    ] = None,
    insecure_skip_tls_verify: Annotated[
        Optional[bool],
        typer.Option("--insecure-skip-tls-verify/--verify-tls", help="Skip TLS certificate verification."),
    ] = None,
    debug: Annotated[
        Optional[bool],
        typer.Option("--debug/--no-debug", help="Enable debug logging including raw API responses."),
    ] = None,
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="Explicit log level.")] = None,
    ready_requires_scrape: Annotated[
        Optional[bool],
        typer.Option(
            "--ready-requires-scrape/--ready-always",
            help="Report not ready until the first successful kubelet scrape.",
        ),
    ] = None,
) -> None:
    """
    Poll the kubelet and serve volume stats until interrupted.
    """
    if ctx.invoked_subcommand is not None:
        return

    try:
        settings = build_settings(
            kubelet_endpoint=kubelet_endpoint,
            metrics_host=metrics_host,
            metrics_port=metrics_port,
            scrape_interval=scrape_interval,
            token_path=token_path,
            insecure_skip_tls_verify=insecure_skip_tls_verify,
            debug=debug,
            log_level=log_level,
            ready_requires_scrape=ready_requires_scrape,
        )
    except ValueError as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(code=1)

    logging.basicConfig(
        level=settings.EFFECTIVE_LOG_LEVEL,
        format="%(asctime)s - %(levelname)s - %(message)s",
        force=True,
    )
    logger.info(
        "Starting kubelet volume stats exporter (kubelet_endpoint=%s, metrics_port=%d, scrape_interval=%s, debug=%s)",
        settings.KUBELET_ENDPOINT,
        settings.METRICS_PORT,
        settings.SCRAPE_INTERVAL,
        settings.DEBUG,
    )

    try:
        asyncio.run(_async_start(settings))
    except PortBindError as e:
        logger.critical(str(e))
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        logger.info("Shutting down kubelet volume stats exporter.")
        raise typer.Exit()
    except Exception as e:
        logger.error(f"An unexpected error occurred: {e}")
        logger.error("Exporter failed: %s", traceback.format_exc())
        raise typer.Exit(code=1)
