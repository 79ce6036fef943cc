"""Plain HTTP user service that creates users with random ids."""

from __future__ import annotations

import argparse
import json
import logging
import random
import string
import threading
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

from pixiu_backends.userdb import SEED_TIME, _format_time

logger = logging.getLogger(__name__)

ROUTE = "/com.dubbogo.pixiu.TripleUserService/GetUserById"
JSON_UTF8 = "application/json;charset=UTF-8"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 20001

_LETTERS = string.ascii_lowercase + string.ascii_uppercase
_EXISTS_BODY = b'{"message":"data is exist"}'


@dataclass
class HttpUser:
    """A user record of the HTTP sample service."""

    id: str = ""
    name: str = ""
    age: int = 0
    time: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form with every field present."""
        return {
            "id": self.id,
            "name": self.name,
            "age": self.age,
            "time": _format_time(self.time),
        }


class UserCache:
    """Thread-safe map from user name to user; later adds replace earlier ones."""

    def __init__(self) -> None:
        self._users: dict[str, HttpUser] = {}
        self._lock = threading.Lock()

    def add(self, user: HttpUser) -> bool:
        """Store the user under its name, replacing any previous one."""
        with self._lock:
            self._users[user.name] = user
            return True

    def get(self, name: str) -> HttpUser | None:
        """Return the user stored under this name, or None."""
        with self._lock:
            return self._users.get(name)


def _seeded_cache() -> UserCache:
    cache = UserCache()
    cache.add(HttpUser(id="0001", name="tc", age=18, time=SEED_TIME))
    cache.add(HttpUser(id="0002", name="ic", age=88, time=SEED_TIME))
    return cache


def random_id(length: int = 5) -> str:
    """Return a string of random ASCII letters."""
    return "".join(random.choice(_LETTERS) for _ in range(length))


def _kind_of(value: Any) -> str:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, list):
        return "array"
    return "object"


def handle_user_request(
    cache: UserCache, method: str, body: bytes
) -> tuple[dict[str, str], bytes]:
    """Answer one request to the user route; return the headers and body to send.

    Only POST does anything. The body is a JSON string naming a user; if a
    user of that name is cached the reply says so, otherwise a user with a
    random id is created and returned. Decoding errors are written to the
    reply ahead of whatever follows, as the service has always done.
    """
    if method != "POST":
        return {}, b""

    out = bytearray()
    name = ""
    try:
        value = json.loads(body)
    except ValueError as exc:
        out += str(exc).encode()
    else:
        if isinstance(value, str):
            name = value
        elif value is not None:
            out += f"cannot decode JSON {_kind_of(value)} as a string".encode()

    headers: dict[str, str] = {}
    if not out:
        headers["Content-Type"] = JSON_UTF8

    if cache.get(name) is not None:
        out += _EXISTS_BODY
        return headers, bytes(out)

    user = HttpUser(id=random_id(5))
    cache.add(user)
    out += json.dumps(user.to_dict(), separators=(",", ":")).encode()
    return headers, bytes(out)


class _UserServer(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, address: tuple[str, int], cache: UserCache) -> None:
        super().__init__(address, _UserHandler)
        self.cache = cache


class _UserHandler(BaseHTTPRequestHandler):
    server: _UserServer

    def _serve(self) -> None:
        path = self.path.split("?", 1)[0]
        if path != ROUTE:
            self.send_error(404, "404 page not found")
            return
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length > 0 else b""
        headers, payload = handle_user_request(self.server.cache, self.command, body)
        self.send_response(200)
        for key, value in headers.items():
            self.send_header(key, value)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(payload)

    do_GET = do_POST = do_PUT = do_DELETE = do_PATCH = do_HEAD = _serve

    def log_message(self, format: str, *args: Any) -> None:
        logger.info("%s - %s", self.address_string(), format % args)


def make_server(
    host: str = DEFAULT_HOST, port: int = DEFAULT_PORT, cache: UserCache | None = None
) -> _UserServer:
    """Create, without starting, an HTTP server for the user route."""
    if cache is None:
        cache = _seeded_cache()
    return _UserServer((host, port), cache)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the HTTP user service until interrupted."""
    parser = argparse.ArgumentParser(description="Run the sample HTTP user service.")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    with make_server(args.host, args.port) as server:
        logger.info("Starting sample server ...")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0