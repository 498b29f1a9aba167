"""Configuration models for the Brother MTConnect gateway."""

from .agent import (
    DEFAULT_AGENT_PORT,
    DEFAULT_CNC_HOST,
    DEFAULT_CNC_PORT,
    AgentConfig,
    ControllerConfig,
    PollingConfig,
    PublisherConfig,
)

__all__ = [
    "AgentConfig",
    "ControllerConfig",
    "DEFAULT_AGENT_PORT",
    "DEFAULT_CNC_HOST",
    "DEFAULT_CNC_PORT",
    "PollingConfig",
    "PublisherConfig",
]
