"""
HTTP surface of the exporter.

Serves the Prometheus exposition on /metrics and blank 200 responses on
/liveness and /readiness from a threading WSGI server, so overlapping
scrapes are handled concurrently (the cache serialises upstream refreshes).
"""

import platform
from typing import Callable, Iterable, Optional
from wsgiref.simple_server import WSGIServer, make_server

from prometheus_client import CollectorRegistry, Gauge, make_wsgi_app
from prometheus_client.exposition import ThreadingWSGIServer, _get_best_family, _SilentHandler

from . import __version__
from .collector import DomainCollector, DomainListSource
from .enums import ConfigErrorCode
from .exceptions import ConfigError
from .structured_logger import StructuredLogger

HEALTH_PATHS = ("/liveness", "/readiness")
METRICS_PATH = "/metrics"
BIND_ALL_ADDRESS = "0.0.0.0"


def parse_listen_address(address: str) -> tuple[str, int]:
    """
    Split a listen address into host and port.

    ':8080' binds all interfaces; IPv6 hosts are written in brackets
    ('[::1]:8080').

    Raises:
        ConfigError: If the port is missing or not a valid port number
    """
    host, sep, port = address.rpartition(":")
    if not sep or not port.isdigit() or not 0 < int(port) < 65536:
        raise ConfigError(
            code=ConfigErrorCode.INVALID_ADDRESS.value,
            message=f"Invalid listen address: {address!r}",
            details={"address": address},
        )
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    return host, int(port)


def create_registry(source: DomainListSource) -> CollectorRegistry:
    """Build a registry holding build_info and the domain collector."""
    registry = CollectorRegistry()

    build_info = Gauge(
        "build_info",
        "Application build information",
        ["version", "python_version"],
        registry=registry,
    )
    build_info.labels(__version__, platform.python_version()).set(1)

    registry.register(DomainCollector(source))
    return registry


def create_app(registry: CollectorRegistry) -> Callable:
    """Create the WSGI application routing metrics and health checks."""
    metrics_app = make_wsgi_app(registry)

    def app(environ: dict, start_response: Callable) -> Iterable[bytes]:
        path = environ.get("PATH_INFO", "")
        if path == METRICS_PATH:
            return metrics_app(environ, start_response)
        if path in HEALTH_PATHS:
            start_response("200 OK", [("Content-Length", "0")])
            return [b""]
        start_response("404 Not Found", [("Content-Type", "text/plain; charset=utf-8")])
        return [b"Not Found\n"]

    return app


def create_server(
    listen_address: str,
    registry: CollectorRegistry,
) -> WSGIServer:
    """
    Bind a threading WSGI server for the exporter application.

    The address family follows the resolved host, the same way
    prometheus_client's start_wsgi_server picks it.
    """
    host, port = parse_listen_address(listen_address)

    class ExporterServer(ThreadingWSGIServer):
        pass

    ExporterServer.address_family, host = _get_best_family(host or BIND_ALL_ADDRESS, port)
    return make_server(
        host,
        port,
        create_app(registry),
        server_class=ExporterServer,
        handler_class=_SilentHandler,
    )


def serve(
    listen_address: str,
    registry: CollectorRegistry,
    logger: Optional[StructuredLogger] = None,
) -> None:
    """Serve until interrupted."""
    httpd = create_server(listen_address, registry)
    if logger:
        logger.info("server", "Starting web server", {"listen_address": listen_address})
    try:
        httpd.serve_forever()
    finally:
        httpd.server_close()
