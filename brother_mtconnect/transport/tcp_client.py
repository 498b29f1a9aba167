"""TCP transport for the Brother CNC command protocol."""

from __future__ import annotations

import logging
from logging import Formatter, BASIC_FORMAT
import socket
import threading
import time

from ..errors import TransportError

logger = logging.getLogger(__name__)
handler = logging.StreamHandler()
handler.setLevel(logging.INFO)
handler.setFormatter(Formatter(BASIC_FORMAT))
logger.addHandler(handler)

RECV_CHUNK = 4096


def build_request(command: str, argument: str = "") -> str:
    """Return the framed request line for ``command`` and ``argument``.

    The controller expects ``C`` followed by the command padded to seven
    characters and the argument padded to eight, wrapped as
    ``%<line>\\r\\n<checksum>%\\r\\n`` where the checksum is the character sum
    of the line modulo 16.
    """

    line = "C" + command.ljust(7) + argument.ljust(8) + "  \r\n"
    checksum = sum(ord(char) for char in line) % 16
    return f"%{line}\r\n{checksum:02d}%\r\n"


def is_complete_response(text: str) -> bool:
    stripped = text.rstrip("\r\n")
    return len(stripped) > 1 and stripped.startswith("%") and stripped.endswith("%")


class BrotherRequestClient:
    """Sends one command per connection and returns the raw framed response."""

    def __init__(
        self,
        *,
        host: str,
        port: int,
        timeout_sec: float = 2.0,
        connect_attempts: int = 10,
        retry_delay_sec: float = 0.02,
    ):
        if connect_attempts < 1:
            raise ValueError("connect_attempts must be at least 1")
        self.host = host
        self.port = port
        self.timeout_sec = timeout_sec
        self.connect_attempts = connect_attempts
        self.retry_delay_sec = retry_delay_sec
        # The controller answers one exchange at a time.
        self._lock = threading.Lock()
        self.last_request: str | None = None

    def send(self, command: str, argument: str = "") -> str:
        payload = build_request(command, argument)
        with self._lock:
            sock = self._connect()
            try:
                logger.debug("Sending %s %s to %s:%s", command, argument, self.host, self.port)
                sock.sendall(payload.encode("ascii"))
                self.last_request = payload
                return self._receive(sock)
            except socket.timeout as exc:
                raise TransportError(
                    f"Timed out waiting for {command} {argument}".rstrip(),
                    host=self.host,
                    port=self.port,
                ) from exc
            except OSError as exc:
                raise TransportError(
                    f"Socket error during {command}: {exc}", host=self.host, port=self.port
                ) from exc
            finally:
                try:
                    sock.close()
                except OSError:
                    pass

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #
    def _connect(self) -> socket.socket:
        last_error: OSError | None = None
        for attempt in range(1, self.connect_attempts + 1):
            try:
                sock = socket.create_connection((self.host, self.port), timeout=self.timeout_sec)
            except OSError as exc:
                last_error = exc
                logger.debug(
                    "Connect attempt %d/%d to %s:%s failed: %s",
                    attempt,
                    self.connect_attempts,
                    self.host,
                    self.port,
                    exc,
                )
                if attempt < self.connect_attempts:
                    time.sleep(self.retry_delay_sec)
                continue
            sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
            sock.settimeout(self.timeout_sec)
            return sock
        raise TransportError(
            f"Unable to connect after {self.connect_attempts} attempts: {last_error}",
            host=self.host,
            port=self.port,
        )

    @staticmethod
    def _receive(sock: socket.socket) -> str:
        chunks: list[str] = []
        text = ""
        while not is_complete_response(text):
            data = sock.recv(RECV_CHUNK)
            if not data:
                break
            chunks.append(data.decode("ascii", errors="replace"))
            text = "".join(chunks)
        return text
