"""Pydantic configuration for the gateway process."""

from __future__ import annotations

import os
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from ..schema import ControlVersion, UnitSystem

DEFAULT_CNC_HOST = "10.0.0.25"
DEFAULT_CNC_PORT = 10000
DEFAULT_AGENT_PORT = 7878

ENV_CNC_HOST = "CNC_IP_ADDRESS"
ENV_CNC_PORT = "CNC_PORT"
ENV_AGENT_PORT = "AGENT_PORT"


class ControllerConfig(BaseModel):
    """Where and how to reach the CNC controller."""

    host: str = DEFAULT_CNC_HOST
    port: int = DEFAULT_CNC_PORT
    timeout_sec: float = 2.0
    connect_attempts: int = 10
    retry_delay_sec: float = 0.02
    control_version: Literal["auto", "C00", "D00"] = "auto"
    unit_system: Literal["auto", "metric", "inch"] = "auto"

    @field_validator("port")
    @classmethod
    def _ensure_port(cls, value: int) -> int:
        if not (0 < value < 65536):
            raise ValueError("port must be within 1-65535")
        return value

    @field_validator("timeout_sec", "retry_delay_sec")
    @classmethod
    def _ensure_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("must be greater than zero")
        return value

    @field_validator("connect_attempts")
    @classmethod
    def _ensure_attempts(cls, value: int) -> int:
        if value < 1:
            raise ValueError("connect_attempts must be at least 1")
        return value

    def forced_version(self) -> Optional[ControlVersion]:
        if self.control_version == "auto":
            return None
        return ControlVersion(self.control_version)

    def forced_units(self) -> Optional[UnitSystem]:
        if self.unit_system == "auto":
            return None
        return UnitSystem.INCH if self.unit_system == "inch" else UnitSystem.METRIC


class PollingConfig(BaseModel):
    interval_sec: float = 2.0
    status_every_cycles: int = 5
    data_map_path: Optional[str] = None

    @field_validator("interval_sec")
    @classmethod
    def _ensure_interval(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("interval_sec must be greater than zero")
        return value

    @field_validator("status_every_cycles")
    @classmethod
    def _ensure_cycles(cls, value: int) -> int:
        if value < 1:
            raise ValueError("status_every_cycles must be at least 1")
        return value


class PublisherConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = DEFAULT_AGENT_PORT
    sender: str = "BrotherAdapter"
    instance_id: int = 1
    buffer_size: int = 131072
    device_name: str = "Brother CNC Machine"

    @field_validator("port")
    @classmethod
    def _ensure_port(cls, value: int) -> int:
        if not (0 < value < 65536):
            raise ValueError("port must be within 1-65535")
        return value


class AgentConfig(BaseModel):
    """Top-level configuration object."""

    controller: ControllerConfig = Field(default_factory=ControllerConfig)
    polling: PollingConfig = Field(default_factory=PollingConfig)
    publisher: PublisherConfig = Field(default_factory=PublisherConfig)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AgentConfig":
        """Build a config from ``CNC_IP_ADDRESS``, ``CNC_PORT`` and ``AGENT_PORT``.

        Unset, empty or non-numeric values keep their defaults.
        """

        environ = os.environ if environ is None else environ
        controller: dict[str, object] = {}
        publisher: dict[str, object] = {}

        host = environ.get(ENV_CNC_HOST, "").strip()
        if host:
            controller["host"] = host
        port = _int_or_none(environ.get(ENV_CNC_PORT))
        if port is not None:
            controller["port"] = port
        agent_port = _int_or_none(environ.get(ENV_AGENT_PORT))
        if agent_port is not None:
            publisher["port"] = agent_port

        return cls(
            controller=ControllerConfig(**controller),
            publisher=PublisherConfig(**publisher),
        )


def _int_or_none(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None
