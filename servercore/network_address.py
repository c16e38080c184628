"""IPv4 endpoint addresses."""

from __future__ import annotations

import socket

_ANY_ADDRESS = "0.0.0.0"
_MAX_PORT = 0xFFFF


def ip_string_to_packed(ip: str) -> bytes:
    """Convert a dotted-quad IPv4 string into its four network-order bytes."""
    try:
        return socket.inet_pton(socket.AF_INET, ip)
    except (OSError, TypeError) as exc:
        raise ValueError(f"invalid IPv4 address: {ip!r}") from exc


def _check_port(port: int) -> int:
    if isinstance(port, bool) or not isinstance(port, int):
        raise TypeError(f"port must be an integer, not {type(port).__name__}")
    if not 0 <= port <= _MAX_PORT:
        raise ValueError(f"port out of range 0-{_MAX_PORT}: {port}")
    return port


class NetworkAddress:
    """An IPv4 address and TCP port, as handed to bind() or connect()."""

    __slots__ = ("_packed", "_port")

    def __init__(self, ip: str = _ANY_ADDRESS, port: int = 0) -> None:
        self._packed = ip_string_to_packed(ip)
        self._port = _check_port(port)

    @classmethod
    def from_socket_address(cls, address: tuple) -> NetworkAddress:
        """Build an address from a ``(host, port)`` tuple such as getsockname() returns."""
        try:
            host, port = address[0], address[1]
        except (TypeError, IndexError) as exc:
            raise ValueError(f"not an IPv4 socket address: {address!r}") from exc
        return cls(host, port)

    @property
    def socket_address(self) -> tuple[str, int]:
        """The ``(ip, port)`` tuple accepted by the socket module."""
        return (self.ip, self._port)

    @property
    def ip(self) -> str:
        return socket.inet_ntop(socket.AF_INET, self._packed)

    @property
    def port(self) -> int:
        return self._port

    @property
    def packed(self) -> bytes:
        """The address as four bytes in network order."""
        return self._packed

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NetworkAddress):
            return NotImplemented
        return self._packed == other._packed and self._port == other._port

    def __hash__(self) -> int:
        return hash((self._packed, self._port))

    def __repr__(self) -> str:
        return f"NetworkAddress({self.ip!r}, {self._port})"

    def __str__(self) -> str:
        return f"{self.ip}:{self._port}"