# src/volume_stats_exporter/api/server.py
"""
uvicorn wiring for the exporter's HTTP endpoints.

The listening socket is bound up front so a bind failure surfaces as a
PortBindError before any collection starts.
"""

import socket

import uvicorn
from fastapi import FastAPI

from volume_stats_exporter.core.config import Config
from volume_stats_exporter.core.exceptions import PortBindError


def bind_socket(host: str, port: int) -> socket.socket:
    """
    Binds a listening TCP socket for the metrics server.

    Raises:
        PortBindError: If the address cannot be bound.
    """
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
    except OSError as e:
        sock.close()
        raise PortBindError(host, port, str(e)) from e
    sock.set_inheritable(True)
    return sock


def create_server(app: FastAPI, settings: Config) -> uvicorn.Server:
    """
    Builds a uvicorn server for the app.

    In-flight requests get SHUTDOWN_GRACE_SECONDS to finish on shutdown.
    """
    server_config = uvicorn.Config(
        app,
        host=settings.METRICS_HOST,
        port=settings.METRICS_PORT,
        log_level=settings.EFFECTIVE_LOG_LEVEL.lower(),
        access_log=settings.DEBUG,
        lifespan="off",
        timeout_graceful_shutdown=settings.SHUTDOWN_GRACE_SECONDS,
    )
    return uvicorn.Server(server_config)
