from __future__ import annotations

import socket
import threading

import pytest

from brother_mtconnect.errors import TransportError
from brother_mtconnect.transport import BrotherRequestClient, build_request
from brother_mtconnect.transport.tcp_client import is_complete_response


def test_build_request_pads_fields_and_appends_checksum() -> None:
    request = build_request("LOD", "MEM")

    line = "CLOD    MEM       \r\n"
    checksum = sum(ord(char) for char in line) % 16
    assert request == f"%{line}\r\n{checksum:02d}%\r\n"


def test_is_complete_response() -> None:
    assert is_complete_response("%LOD\r\nO2045\r\n05%\r\n")
    assert not is_complete_response("%LOD\r\nO20")
    assert not is_complete_response("%")
    assert not is_complete_response("")


def serve_once(reply: bytes) -> tuple[int, list[bytes]]:
    """Accept one connection on an ephemeral port and answer with ``reply``."""

    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.bind(("127.0.0.1", 0))
    server.listen(1)
    received: list[bytes] = []

    def handle() -> None:
        conn, _ = server.accept()
        with conn:
            received.append(conn.recv(1024))
            for start in range(0, len(reply), 7):
                conn.sendall(reply[start : start + 7])
        server.close()

    threading.Thread(target=handle, daemon=True).start()
    return server.getsockname()[1], received


def test_send_reads_until_frame_is_complete() -> None:
    reply = b"%LOD\r\nC00,BROTHER\r\n05%\r\n"
    port, received = serve_once(reply)
    client = BrotherRequestClient(host="127.0.0.1", port=port, timeout_sec=1.0)

    response = client.send("LOD", "PRDC2")

    assert response == reply.decode("ascii")
    assert received[0] == build_request("LOD", "PRDC2").encode("ascii")
    assert client.last_request == build_request("LOD", "PRDC2")


def unused_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
        probe.bind(("127.0.0.1", 0))
        return probe.getsockname()[1]


def test_connection_refused_raises_transport_error() -> None:
    port = unused_port()
    client = BrotherRequestClient(
        host="127.0.0.1", port=port, timeout_sec=0.2, connect_attempts=2, retry_delay_sec=0.01
    )

    with pytest.raises(TransportError) as excinfo:
        client.send("LOD", "MEM")

    assert excinfo.value.port == port
    assert "after 2 attempts" in str(excinfo.value)


def test_rejects_zero_connect_attempts() -> None:
    with pytest.raises(ValueError):
        BrotherRequestClient(host="127.0.0.1", port=10000, connect_attempts=0)
