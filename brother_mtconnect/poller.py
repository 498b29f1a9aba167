"""Background loop that polls the controller and feeds the snapshot."""

from __future__ import annotations

import logging
from logging import Formatter, BASIC_FORMAT
from functools import partial
import threading
from typing import Callable, Mapping, Sequence

from .configs import ControllerConfig, PollingConfig
from .decoders import (
    decode_alarms,
    decode_atc,
    decode_counters,
    decode_macros,
    decode_monitor,
    decode_panel,
    decode_program,
    decode_tool_table,
    decode_with_data_map,
    decode_work_offsets,
)
from .detection import detect_control_version, detect_unit_system
from .errors import TransportError
from .loader import FileLoader
from .mapping import DataMap, load_data_map
from .schema import (
    AtcSchema,
    ControlVersion,
    UnitSystem,
    get_atc_schema,
    get_macro_schema,
    get_tool_table_schema,
    get_work_offset_schema,
)
from .telemetry import TelemetrySnapshot
from .utils import monotonic_ms

logger = logging.getLogger(__name__)
handler = logging.StreamHandler()
handler.setLevel(logging.INFO)
handler.setFormatter(Formatter(BASIC_FORMAT))
logger.addHandler(handler)

Decoder = Callable[[Sequence[str]], Mapping[str, str]]


class TelemetryPoller:
    """Polls the fast stream every cycle and the status files every N cycles.

    The controller generation and unit system are detected once, on the first
    cycle that reaches the controller. A transport failure during detection or
    on the fast stream fails the cycle; one on a status file only skips that
    file. Failures are counted and retried, they never stop the loop.
    """

    def __init__(
        self,
        loader: FileLoader,
        snapshot: TelemetrySnapshot,
        *,
        controller: ControllerConfig | None = None,
        polling: PollingConfig | None = None,
        data_map: DataMap | None = None,
    ):
        self.loader = loader
        self.snapshot = snapshot
        self.controller = controller or ControllerConfig()
        self.polling = polling or PollingConfig()
        self.data_map = data_map or load_data_map(self.polling.data_map_path)
        self.control_version: ControlVersion | None = None
        self.unit_system: UnitSystem | None = None
        self.cycle = 0
        self.consecutive_failures = 0
        self.status_file_failures = 0
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #
    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self.run, name="brother-poller", daemon=True)
        self._thread.start()
        logger.info(
            "Polling controller %s:%s every %.1fs",
            self.controller.host,
            self.controller.port,
            self.polling.interval_sec,
        )

    def stop(self, timeout: float = 5.0) -> None:
        self._stop.set()
        if self._thread:
            self._thread.join(timeout=timeout)
            self._thread = None

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def run(self) -> None:
        while not self._stop.is_set():
            self.run_cycle()
            self._stop.wait(self.polling.interval_sec)

    # ------------------------------------------------------------------ #
    # Cycle
    # ------------------------------------------------------------------ #
    def run_cycle(self) -> bool:
        """Run one poll cycle; returns ``False`` when the controller was unreachable."""

        started = monotonic_ms()
        try:
            self._ensure_detected()
            self._poll_fast_stream()
            if self.cycle % self.polling.status_every_cycles == 0:
                self._poll_status_files()
        except TransportError as exc:
            self.consecutive_failures += 1
            logger.error(
                "Controller unreachable: %s. Retrying in %.1fs (consecutive failures: %d)",
                exc,
                self.polling.interval_sec,
                self.consecutive_failures,
            )
            return False

        if self.consecutive_failures:
            logger.info("Controller reachable again after %d failed cycles", self.consecutive_failures)
        self.consecutive_failures = 0
        self.cycle += 1
        logger.debug("Poll cycle %d finished in %.0f ms", self.cycle, monotonic_ms() - started)
        return True

    def _ensure_detected(self) -> None:
        if self.control_version is not None:
            return
        version = self.controller.forced_version() or detect_control_version(self.loader)
        units = self.controller.forced_units() or detect_unit_system(self.loader, version)
        self.control_version = version
        self.unit_system = units
        logger.info("Using %s layouts with %s units", version.value, units.value)

    def _poll_fast_stream(self) -> None:
        lines = self.loader.load(self.data_map.file_name)
        if lines is None:
            logger.debug("Fast stream %s returned no data", self.data_map.file_name)
            return
        self.snapshot.merge(decode_with_data_map(lines, self.data_map))

    def _poll_status_files(self) -> None:
        for filename, decode in self.status_files():
            try:
                lines = self.loader.load(filename)
                if lines is None:
                    logger.debug("Status file %s not available", filename)
                    continue
                self.snapshot.merge(decode(lines))
            except TransportError as exc:
                self.status_file_failures += 1
                logger.warning("Could not load %s: %s. Continuing with the next status file", filename, exc)
            except Exception:
                logger.warning("Failed to decode %s; keeping previous values", filename, exc_info=True)

    def status_files(self) -> list[tuple[str, Decoder]]:
        """Slow-cadence files in load order; the tool table precedes the ATC file."""

        version = self.control_version or ControlVersion.C00
        units = self.unit_system or UnitSystem.METRIC
        tool_table = get_tool_table_schema(version)
        work_offsets = get_work_offset_schema(version)
        atc = get_atc_schema(version)
        macros = get_macro_schema(version)
        return [
            ("MEM", decode_program),
            ("ALARM", decode_alarms),
            ("WKCNTR", decode_counters),
            (tool_table.filename(units), partial(decode_tool_table, schema=tool_table, units=units)),
            (work_offsets.filename(units), partial(decode_work_offsets, schema=work_offsets, units=units)),
            ("MONTR", decode_monitor),
            (atc.filename, self._atc_decoder(atc)),
            ("PANEL", decode_panel),
            (macros.filename(units), partial(decode_macros, schema=macros, units=units)),
        ]

    def _atc_decoder(self, schema: AtcSchema) -> Decoder:
        def decode(lines: Sequence[str]) -> Mapping[str, str]:
            return decode_atc(lines, schema=schema, cross_reference=self.snapshot.read())

        return decode
