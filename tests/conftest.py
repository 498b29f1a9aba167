from __future__ import annotations

import pytest

from brother_mtconnect.errors import TransportError
from brother_mtconnect.loader import FileLoader
from brother_mtconnect.telemetry import TelemetrySnapshot


def wrap(command: str, payload: str) -> str:
    """Frame ``payload`` the way the controller answers a request."""

    return f"%{command}\r\n{payload}\r\n05%\r\n"


class DummyRequestClient:
    """Serves canned files keyed by LOD argument."""

    def __init__(self, files: dict[str, str] | None = None):
        self.files = dict(files or {})
        self.requests: list[tuple[str, str]] = []
        self.fail = False
        self.failing: set[str] = set()

    def send(self, command: str, argument: str = "") -> str:
        self.requests.append((command, argument))
        if self.fail or argument in self.failing:
            raise TransportError("connection refused", host="127.0.0.1", port=10000)
        payload = self.files.get(argument)
        if payload is None:
            return wrap(command, "NOT FOUND")
        return wrap(command, payload)

    def loaded(self) -> list[str]:
        return [argument for _, argument in self.requests]


@pytest.fixture()
def request_client() -> DummyRequestClient:
    return DummyRequestClient()


@pytest.fixture()
def loader(request_client: DummyRequestClient) -> FileLoader:
    return FileLoader(request_client)


@pytest.fixture()
def snapshot() -> TelemetrySnapshot:
    return TelemetrySnapshot()
