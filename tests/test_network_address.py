import socket

import pytest

from servercore.network_address import NetworkAddress, ip_string_to_packed


def test_ip_and_port_round_trip():
    address = NetworkAddress("127.0.0.1", 8888)
    assert address.ip == "127.0.0.1"
    assert address.port == 8888


def test_packed_is_network_order():
    assert NetworkAddress("127.0.0.1", 8888).packed == b"\x7f\x00\x00\x01"


def test_default_is_zeroed_address():
    address = NetworkAddress()
    assert address.packed == bytes(4)
    assert address.port == 0


def test_socket_address_tuple():
    address = NetworkAddress("10.1.2.3", 4000)
    assert address.socket_address == ("10.1.2.3", 4000)


def test_from_socket_address_round_trip():
    address = NetworkAddress.from_socket_address(("192.168.0.7", 80))
    assert address.socket_address == ("192.168.0.7", 80)
    assert address == NetworkAddress("192.168.0.7", 80)


def test_from_real_socket_name():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        name = sock.getsockname()
        address = NetworkAddress.from_socket_address(name)
    assert address.socket_address == name


def test_equality_and_hash():
    a = NetworkAddress("127.0.0.1", 1)
    b = NetworkAddress("127.0.0.1", 1)
    c = NetworkAddress("127.0.0.1", 2)
    assert a == b
    assert hash(a) == hash(b)
    assert a != c
    assert len({a, b, c}) == 2


def test_str_joins_ip_and_port():
    assert str(NetworkAddress("127.0.0.1", 8888)) == "127.0.0.1:8888"


@pytest.mark.parametrize("bad", ["", "256.0.0.1", "localhost", "1.2.3", "::1"])
def test_invalid_ip_raises(bad):
    with pytest.raises(ValueError):
        NetworkAddress(bad, 80)


@pytest.mark.parametrize("bad", [-1, 65536])
def test_port_out_of_range_raises(bad):
    with pytest.raises(ValueError):
        NetworkAddress("127.0.0.1", bad)


def test_port_must_be_int():
    with pytest.raises(TypeError):
        NetworkAddress("127.0.0.1", "80")


def test_from_socket_address_rejects_garbage():
    with pytest.raises(ValueError):
        NetworkAddress.from_socket_address(("127.0.0.1",))


def test_ip_string_to_packed_round_trip():
    packed = ip_string_to_packed("172.16.5.9")
    assert len(packed) == 4
    assert socket.inet_ntoa(packed) == "172.16.5.9"


def test_ip_string_to_packed_invalid():
    with pytest.raises(ValueError):
        ip_string_to_packed("not an address")