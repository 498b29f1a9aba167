"""Fetch controller files through the ``LOD`` command."""

from __future__ import annotations

import logging
from typing import Protocol

from .telemetry import parse_response

logger = logging.getLogger(__name__)

LOAD_COMMAND = "LOD"


class RequestClient(Protocol):
    def send(self, command: str, argument: str = "") -> str: ...


class FileLoader:
    """Loads a named file and returns its payload lines.

    Transport failures propagate; anything wrong with the response itself
    means the file is unavailable and yields ``None``.
    """

    def __init__(self, client: RequestClient):
        self.client = client

    def load(self, name: str) -> list[str] | None:
        raw = self.client.send(LOAD_COMMAND, name)
        try:
            frame = parse_response(raw)
        except (ValueError, TypeError, AttributeError) as exc:
            logger.debug("Could not extract %s payload: %s", name, exc)
            return None
        if frame.is_absent:
            logger.debug("File %s not available on the controller", name)
            return None
        return frame.as_list()
