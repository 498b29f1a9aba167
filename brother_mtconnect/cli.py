"""Command line entry point: poll the controller and serve MTConnect."""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

import uvicorn

from .configs import AgentConfig
from .loader import FileLoader
from .mtconnect import create_app
from .poller import TelemetryPoller
from .telemetry import TelemetrySnapshot
from .transport import BrotherRequestClient

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="MTConnect agent for Brother CNC controllers"
    )
    ap.add_argument("--cnc-host", help="controller address (default: $CNC_IP_ADDRESS or 10.0.0.25)")
    ap.add_argument("--cnc-port", type=int, help="controller port (default: $CNC_PORT or 10000)")
    ap.add_argument("--port", type=int, help="HTTP port (default: $AGENT_PORT or 7878)")
    ap.add_argument("--host", help="HTTP bind address (default: 0.0.0.0)")
    ap.add_argument("--interval", type=float, help="seconds between poll cycles (default: 2)")
    ap.add_argument("--control-version", choices=["auto", "C00", "D00"], help="skip version detection")
    ap.add_argument("--units", choices=["auto", "metric", "inch"], help="skip unit detection")
    ap.add_argument("--data-map", help="path to a DataMap JSON for the fast stream")
    ap.add_argument("--log-level", default="INFO", help="root log level")
    return ap


def load_config(args: argparse.Namespace) -> AgentConfig:
    config = AgentConfig.from_env()
    controller = config.controller.model_dump()
    polling = config.polling.model_dump()
    publisher = config.publisher.model_dump()

    if args.cnc_host:
        controller["host"] = args.cnc_host
    if args.cnc_port is not None:
        controller["port"] = args.cnc_port
    if args.control_version:
        controller["control_version"] = args.control_version
    if args.units:
        controller["unit_system"] = args.units
    if args.interval is not None:
        polling["interval_sec"] = args.interval
    if args.data_map:
        polling["data_map_path"] = args.data_map
    if args.port is not None:
        publisher["port"] = args.port
    if args.host:
        publisher["host"] = args.host

    return AgentConfig(controller=controller, polling=polling, publisher=publisher)


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())
    config = load_config(args)

    client = BrotherRequestClient(
        host=config.controller.host,
        port=config.controller.port,
        timeout_sec=config.controller.timeout_sec,
        connect_attempts=config.controller.connect_attempts,
        retry_delay_sec=config.controller.retry_delay_sec,
    )
    snapshot = TelemetrySnapshot()
    poller = TelemetryPoller(
        FileLoader(client),
        snapshot,
        controller=config.controller,
        polling=config.polling,
    )
    app = create_app(snapshot, config=config.publisher, poller=poller)

    logger.info(
        "MTConnect agent listening on http://%s:%d (controller %s:%d)",
        config.publisher.host,
        config.publisher.port,
        config.controller.host,
        config.controller.port,
    )
    uvicorn.run(app, host=config.publisher.host, port=config.publisher.port, log_level="info")


if __name__ == "__main__":
    main()
