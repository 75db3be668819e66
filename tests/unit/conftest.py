# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import socket
import ssl
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

import httpx
import pytest

BODY = b"<html>origin body \x00\xff</html>"
# Self-signed certificate and key for example.com.
CERT_FILE = Path(__file__).parent / "data" / "example.com.pem"


class OriginHandler(BaseHTTPRequestHandler):
    def do_GET(self):  # noqa: N802
        self.server.seen_hosts.append(self.headers.get("Host"))
        self.server.seen_user_agents.append(self.headers.get("User-Agent"))
        self.server.seen_cookies.append(self.headers.get("Cookie"))
        if self.path.startswith("/redirect"):
            self.send_response(301)
            self.send_header("Location", "/landing")
            self.send_header("Content-Length", "0")
            self.end_headers()
            return
        self.send_response(200)
        self.send_header("Content-Type", "application/octet-stream")
        self.send_header("X-Origin", "local")
        self.send_header("Content-Length", str(len(BODY)))
        self.end_headers()
        self.wfile.write(BODY)

    def log_message(self, format, *args):  # noqa: A002
        pass


def _start_origin(tls=False):
    server = ThreadingHTTPServer(("127.0.0.1", 0), OriginHandler)
    server.body = BODY
    server.seen_hosts = []
    server.seen_user_agents = []
    server.seen_cookies = []
    server.seen_server_names = []
    if tls:
        context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
        context.load_cert_chain(CERT_FILE)
        context.sni_callback = lambda sslsock, name, ctx: server.seen_server_names.append(name)
        server.socket = context.wrap_socket(server.socket, server_side=True)
    threading.Thread(target=server.serve_forever, daemon=True).start()
    return server


@pytest.fixture
def origin_factory():
    servers = []

    def start(tls=False):
        server = _start_origin(tls)
        servers.append(server)
        return server

    yield start
    for server in servers:
        server.shutdown()
        server.server_close()


@pytest.fixture
def origin_server(origin_factory):
    return origin_factory()


@pytest.fixture
def closed_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


class RecordingTransport:
    """Builds clients whose requests are answered by `handler` and recorded."""

    def __init__(self, handler):
        self.handler = handler
        self.requests = []
        self._lock = threading.Lock()

    def _handle(self, request):
        with self._lock:
            self.requests.append(request)
        return self.handler(request)

    def factory(self, config):
        return httpx.Client(transport=httpx.MockTransport(self._handle), follow_redirects=False)


@pytest.fixture
def recording_transport():
    return RecordingTransport


@pytest.fixture
def tls_origin_server(origin_factory):
    return origin_factory(tls=True)


@pytest.fixture
def origin_trust():
    """SSL context that trusts the TLS origin's example.com certificate."""
    return ssl.create_default_context(cafile=str(CERT_FILE))


class TricklingServer:
    """Sends `head` at once, then `tail` one byte every `delay` seconds, to every connection."""

    def __init__(self, head, tail, delay):
        self.head = head
        self.tail = tail
        self.delay = delay
        self._stop = threading.Event()
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.bind(("127.0.0.1", 0))
        self._sock.listen()
        self._sock.settimeout(0.1)
        self.port = self._sock.getsockname()[1]
        threading.Thread(target=self._serve, daemon=True).start()

    def _serve(self):
        while not self._stop.is_set():
            try:
                conn, _ = self._sock.accept()
            except socket.timeout:
                continue
            except OSError:
                return
            threading.Thread(target=self._drip, args=(conn,), daemon=True).start()

    def _drip(self, conn):
        with conn:
            try:
                conn.recv(65536)
                conn.sendall(self.head)
                for index in range(len(self.tail)):
                    if self._stop.wait(self.delay):
                        return
                    conn.sendall(self.tail[index : index + 1])
            except OSError:
                return

    def close(self):
        self._stop.set()
        self._sock.close()


@pytest.fixture
def trickling_server():
    servers = []

    def start(head, tail, delay=0.05):
        server = TricklingServer(head, tail, delay)
        servers.append(server)
        return server

    yield start
    for server in servers:
        server.close()
