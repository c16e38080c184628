import socket
import threading
import time

import pytest

from servercore.core_global import get_thread_manager
from servercore.server import accept_client, main, open_listener, serve


def _free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
        probe.bind(("127.0.0.1", 0))
        return probe.getsockname()[1]


def _connect_with_retry(port, attempts=100):
    for _ in range(attempts):
        try:
            return socket.create_connection(("127.0.0.1", port), timeout=2)
        except ConnectionRefusedError:
            time.sleep(0.02)
    raise AssertionError("server never started listening")


def test_open_listener_is_blocking_and_bound():
    with open_listener(0) as listener:
        host, port = listener.getsockname()
        assert port > 0
        assert host == "0.0.0.0"
        assert listener.gettimeout() is None


def test_open_listener_rejects_port_in_use():
    with open_listener(0) as first:
        port = first.getsockname()[1]
        with pytest.raises(OSError):
            open_listener(port)


def test_accept_client_returns_peer_address(capsys):
    with open_listener(0) as listener:
        port = listener.getsockname()[1]
        with socket.create_connection(("127.0.0.1", port), timeout=2) as client:
            conn, peer = accept_client(listener)
            with conn:
                assert peer.ip == "127.0.0.1"
                assert peer.port == client.getsockname()[1]
                client.sendall(b"ping")
                assert conn.recv(4) == b"ping"
    assert "client Connected" in capsys.readouterr().out


def test_serve_returns_after_client_disconnects():
    port = _free_port()
    result = {}

    def run():
        result["peer"] = serve(port)

    thread = threading.Thread(target=run)
    thread.start()
    client = _connect_with_retry(port)
    local_port = client.getsockname()[1]
    client.sendall(b"Hello World")
    client.close()
    thread.join(timeout=10)

    assert not thread.is_alive()
    assert result["peer"].port == local_port
    with pytest.raises(RuntimeError):
        get_thread_manager()


def test_main_rejects_bad_port_argument():
    with pytest.raises(SystemExit):
        main(["--port", "not-a-number"])


def test_main_reports_unbindable_port():
    with open_listener(0) as busy:
        port = busy.getsockname()[1]
        assert main(["--port", str(port)]) == 1