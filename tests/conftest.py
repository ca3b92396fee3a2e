import socket
import threading
import time

import pytest

from py_chat.config import ServerSettings
from py_chat.server import ChatServer

ENCODING = "utf-8"


def wait_until(predicate, timeout=3.0, interval=0.01):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


class ChatClient:
    """Test-side TCP client that keeps everything it has received."""

    def __init__(self, address):
        self.sock = socket.create_connection(address, timeout=3.0)
        self.received = b""

    def send(self, text):
        self.sock.sendall(text.encode(ENCODING))

    def wait_for(self, text, timeout=3.0):
        expected = text.encode(ENCODING)
        deadline = time.monotonic() + timeout
        while expected not in self.received:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise AssertionError(
                    f"timed out waiting for {text!r}; got {self.received!r}"
                )
            self.sock.settimeout(remaining)
            try:
                data = self.sock.recv(4096)
            except socket.timeout:
                continue
            if not data:
                raise AssertionError(
                    f"connection closed waiting for {text!r}; got {self.received!r}"
                )
            self.received += data

    def assert_no_more(self, wait=0.3):
        self.sock.settimeout(wait)
        try:
            data = self.sock.recv(4096)
        except socket.timeout:
            return
        raise AssertionError(f"unexpected data {data!r} after {self.received!r}")

    @property
    def text(self):
        return self.received.decode(ENCODING)

    def close(self):
        self.sock.close()


@pytest.fixture
def start_server():
    """Factory that runs a ChatServer on an ephemeral port in a thread."""
    running = []

    def _start(**overrides):
        overrides.setdefault("HOST", "127.0.0.1")
        overrides.setdefault("PORT", 0)
        server = ChatServer(ServerSettings(_env_file=None, **overrides))
        server.start()
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        running.append((server, thread))
        return server

    yield _start

    for server, thread in running:
        server.stop()
        thread.join(timeout=3.0)
        server.close()


@pytest.fixture
def connect():
    """Factory for ChatClient connections that are closed after the test."""
    clients = []

    def _connect(server):
        client = ChatClient(server.address)
        clients.append(client)
        return client

    yield _connect

    for client in clients:
        client.close()


@pytest.fixture
def socket_pairs():
    """Factory for connected (server side, client side) socket pairs."""
    pairs = []

    def _pair():
        server_side, client_side = socket.socketpair()
        client_side.setblocking(False)
        pairs.append((server_side, client_side))
        return server_side, client_side

    yield _pair

    for server_side, client_side in pairs:
        server_side.close()
        client_side.close()


def drain(sock):
    """Read everything currently buffered on a non-blocking socket."""
    data = b""
    while True:
        try:
            chunk = sock.recv(4096)
        except BlockingIOError:
            return data
        if not chunk:
            return data
        data += chunk
