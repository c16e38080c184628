"""Helpers for creating and configuring TCP sockets."""

from __future__ import annotations

import socket
import struct
import sys

from .network_address import NetworkAddress

_ANY_ADDRESS = "0.0.0.0"
_LINGER_FORMAT = "HH" if sys.platform == "win32" else "ii"


def create_socket(overlapped: bool = True) -> socket.socket:
    """Create an IPv4 TCP socket; an overlapped socket is non-blocking."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP)
    if overlapped:
        sock.setblocking(False)
    return sock


def close_socket(sock: socket.socket | None) -> None:
    """Close ``sock`` if there is one."""
    if sock is not None:
        sock.close()


def bind(sock: socket.socket, address: NetworkAddress) -> None:
    """Bind ``sock`` to ``address``; raises OSError on failure."""
    sock.bind(address.socket_address)


def bind_port(sock: socket.socket, port: int) -> None:
    """Bind ``sock`` to ``port`` on every local interface."""
    bind(sock, NetworkAddress(_ANY_ADDRESS, port))


def listen(sock: socket.socket, backlog: int = socket.SOMAXCONN) -> None:
    sock.listen(backlog)


def _check_u16(name: str, value: int) -> int:
    if not 0 <= value <= 0xFFFF:
        raise ValueError(f"{name} out of range 0-65535: {value}")
    return value


def set_linger(sock: socket.socket, onoff: int, linger: int) -> None:
    """Set SO_LINGER: when ``onoff`` is non-zero, close() waits up to ``linger`` seconds."""
    value = struct.pack(
        _LINGER_FORMAT, _check_u16("onoff", onoff), _check_u16("linger", linger)
    )
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_LINGER, value)


def set_reuse_address(sock: socket.socket, flag: bool) -> None:
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1 if flag else 0)


def set_tcp_no_delay(sock: socket.socket, flag: bool) -> None:
    sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1 if flag else 0)


def set_recv_buffer_size(sock: socket.socket, size: int) -> None:
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_RCVBUF, size)


def set_send_buffer_size(sock: socket.socket, size: int) -> None:
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_SNDBUF, size)