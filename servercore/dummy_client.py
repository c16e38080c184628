"""A test client that connects to the server and sends a message repeatedly."""

from __future__ import annotations

import argparse
import itertools
import sys
import time
from typing import Optional, Sequence

from .network_address import NetworkAddress
from .network_utils import close_socket, create_socket

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8888
DEFAULT_MESSAGE = "Hello World"


def run_client(
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    message: str = DEFAULT_MESSAGE,
    interval: float = 1.0,
    count: Optional[int] = None,
) -> int:
    """Send ``message`` every ``interval`` seconds until the connection fails.

    With ``count`` set, stop after that many sends. Returns the number of
    sends that transferred at least one byte.
    """
    address = NetworkAddress(host, port)
    payload = message.encode()
    sock = create_socket(False)
    sent = 0
    try:
        sock.connect(address.socket_address)
        print("Server Connected!", flush=True)

        rounds = itertools.count() if count is None else range(count)
        for round_no in rounds:
            try:
                written = sock.send(payload)
            except OSError:
                break
            if written == 0:
                break

            sent += 1
            if written < len(payload):
                print(f"partial send {written}/{len(payload)} bytes", flush=True)
            else:
                print(f"[{int(time.time())}]  : {message} packet sent ({written})", flush=True)

            if count is None or round_no + 1 < count:
                time.sleep(interval)
    finally:
        close_socket(sock)
    print("Connection closed!", flush=True)
    return sent


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Send a message to the server repeatedly.")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--message", default=DEFAULT_MESSAGE)
    parser.add_argument("--interval", type=float, default=1.0, help="seconds between sends")
    parser.add_argument("--count", type=int, default=None, help="stop after this many sends")
    args = parser.parse_args(argv)

    try:
        run_client(args.host, args.port, args.message, args.interval, args.count)
    except KeyboardInterrupt:
        return 0
    except (OSError, ValueError) as exc:
        print(f"client error: {exc}", file=sys.stderr)
        return 1
    return 0