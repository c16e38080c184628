"""A TCP server that accepts one client and holds the connection open."""

from __future__ import annotations

import argparse
import socket
import sys
from typing import Optional, Sequence

from .core_global import CoreGlobal
from .network_address import NetworkAddress
from .network_utils import bind_port, close_socket, create_socket, listen

DEFAULT_PORT = 8888
_RECV_CHUNK = 4096


def open_listener(port: int = DEFAULT_PORT, backlog: int = socket.SOMAXCONN) -> socket.socket:
    """Create a blocking TCP socket listening on ``port`` on every interface."""
    listener = create_socket(False)
    try:
        bind_port(listener, port)
        listen(listener, backlog)
    except BaseException:
        close_socket(listener)
        raise
    return listener


def accept_client(listener: socket.socket) -> tuple[socket.socket, NetworkAddress]:
    """Wait for one connection and return it with the peer's address."""
    client, peer = listener.accept()
    print("client Connected", flush=True)
    return client, NetworkAddress.from_socket_address(peer)


def _wait_for_disconnect(client: socket.socket) -> None:
    try:
        while client.recv(_RECV_CHUNK):
            pass
    except ConnectionError:
        pass


def serve(port: int = DEFAULT_PORT) -> NetworkAddress:
    """Listen on ``port``, accept a client and keep it until it disconnects.

    Returns the address of the client that was served.
    """
    with CoreGlobal():
        with open_listener(port) as listener:
            client, peer = accept_client(listener)
            with client:
                _wait_for_disconnect(client)
    return peer


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Accept a single TCP client.")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    args = parser.parse_args(argv)

    try:
        serve(args.port)
    except KeyboardInterrupt:
        return 0
    except (OSError, ValueError) as exc:
        print(f"server error: {exc}", file=sys.stderr)
        return 1
    return 0