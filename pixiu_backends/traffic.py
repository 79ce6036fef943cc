"""Small HTTP backends used to exercise traffic splitting and canary routing."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

ROUTES = ("/user", "/user/pixiu", "/prefix", "/health")
PORTS = {None: 1314, "v1": 1315, "v2": 1316, "v3": 1317}
SERVERS = ("v1", "v2", "v3")


def route_message(route: str) -> str:
    """Return the last path segment of a route."""
    return route[route.rfind("/") + 1 :]


def render_body(message: str, server: str | None = None) -> str:
    """Render the JSON reply, tagged with the server version when one is given."""
    if server is None:
        return f'{{"message":"{message}","status":200}}'
    return f'{{"server": "{server}","message":"{message}","status":200}}'


class _TrafficServer(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, address: tuple[str, int], server: str | None) -> None:
        super().__init__(address, _TrafficHandler)
        self.version = server
        self.bodies = {
            route: render_body(route_message(route), server).encode() for route in ROUTES
        }


class _TrafficHandler(BaseHTTPRequestHandler):
    server: _TrafficServer

    def _serve(self) -> None:
        body = self.server.bodies.get(urlsplit(self.path).path)
        if body is None:
            self.send_error(404, "404 page not found")
            return
        self.send_response(200)
        self.send_header("Content-Type", "text/plain; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(body)

    do_GET = do_POST = do_PUT = do_DELETE = do_PATCH = do_HEAD = _serve

    def log_message(self, format: str, *args: Any) -> None:
        logger.info("%s - %s", self.address_string(), format % args)


def make_server(host: str = "", port: int | None = None, server: str | None = None) -> _TrafficServer:
    """Create, without starting, a backend answering the fixed routes."""
    if server is not None and server not in SERVERS:
        raise ValueError(f"unknown server version: {server!r}")
    if port is None:
        port = PORTS[server]
    return _TrafficServer((host, port), server)


def main(argv: Sequence[str] | None = None) -> int:
    """Run one traffic backend until interrupted."""
    parser = argparse.ArgumentParser(description="Run a sample traffic backend.")
    parser.add_argument("--server", choices=SERVERS, default=None, help="version tag")
    parser.add_argument("--host", default="")
    parser.add_argument("--port", type=int, default=None)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    with make_server(args.host, args.port, args.server) as srv:
        logger.info("Starting sample server ...")
        try:
            srv.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0