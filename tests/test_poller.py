from __future__ import annotations

import time

from brother_mtconnect.configs import ControllerConfig, PollingConfig
from brother_mtconnect.poller import TelemetryPoller
from brother_mtconnect.schema import ControlVersion, UnitSystem

STATUS_FILES = ["MEM", "ALARM", "WKCNTR", "TOLNM1", "POSNM1", "MONTR", "ATCTL", "PANEL", "MCRNM1"]

CONTROLLER_FILES = {
    "PRDC2": "C00,BROTHER,SPEEDIO",
    "MSRRSC": "C01,0",
    "PDSP": "L01,0,100,100,100\r\nL02,8000,20,1500",
    "MEM": "O2045.NC",
    "ALARM": "E01,0",
    "TOLNM1": "T05,120.0,0,0.5,0,2,100,0,80,'TAP'",
    "ATCTL": "M01,5,1,0\r\nM04,5,1,0,3",
}


def make_poller(request_client, loader, snapshot, **polling) -> TelemetryPoller:
    request_client.files.update(CONTROLLER_FILES)
    return TelemetryPoller(loader, snapshot, polling=PollingConfig(**polling))


def test_first_cycle_detects_then_polls_everything(request_client, loader, snapshot) -> None:
    poller = make_poller(request_client, loader, snapshot)

    assert poller.run_cycle() is True

    assert poller.control_version is ControlVersion.C00
    assert poller.unit_system is UnitSystem.METRIC
    assert request_client.loaded() == ["PRDD2", "PRDC2", "MSRRSC", "PDSP", *STATUS_FILES]
    assert snapshot.get("Operation mode") == "MEMORY"
    assert snapshot.get("Program name") == "O2045"
    assert snapshot.get("Alarm count") == "0"


def test_status_files_follow_cadence(request_client, loader, snapshot) -> None:
    poller = make_poller(request_client, loader, snapshot)

    for _ in range(5):
        poller.run_cycle()
    assert request_client.loaded().count("MEM") == 1
    assert request_client.loaded().count("PDSP") == 5

    poller.run_cycle()
    assert request_client.loaded().count("MEM") == 2
    assert request_client.loaded().count("PRDC2") == 1


def test_atc_cross_references_tool_table(request_client, loader, snapshot) -> None:
    poller = make_poller(request_client, loader, snapshot)

    poller.run_cycle()

    assert snapshot.get("ATC Spindle Tool Number") == "5"
    assert snapshot.get("ATC Pot 3 Tool Name") == "TAP"
    assert snapshot.get("ATC Pot 3 Diameter") == "0.5"


def test_transport_failure_is_counted_and_retried(request_client, loader, snapshot) -> None:
    poller = make_poller(request_client, loader, snapshot)
    request_client.fail = True

    assert poller.run_cycle() is False
    assert poller.run_cycle() is False
    assert poller.consecutive_failures == 2
    assert poller.control_version is None
    assert poller.cycle == 0
    assert snapshot.is_empty()

    request_client.fail = False
    assert poller.run_cycle() is True
    assert poller.consecutive_failures == 0
    assert poller.cycle == 1
    assert poller.control_version is ControlVersion.C00


def test_failing_decoder_keeps_other_files(request_client, loader, snapshot) -> None:
    poller = make_poller(request_client, loader, snapshot)

    def broken(lines):
        raise ValueError("bad record")

    poller.status_files = lambda: [("ALARM", broken), ("MEM", lambda lines: {"Program name": "X"})]

    assert poller.run_cycle() is True
    assert snapshot.get("Program name") == "X"


def test_forced_version_and_units_skip_detection(request_client, loader, snapshot) -> None:
    controller = ControllerConfig(control_version="D00", unit_system="inch")
    poller = TelemetryPoller(loader, snapshot, controller=controller)

    poller.run_cycle()

    loaded = request_client.loaded()
    assert "PRDD2" not in loaded
    assert "TOLNI1" in loaded
    assert "ATCTLD" in loaded
    assert "MCRNI1" in loaded


def test_background_thread_polls_until_stopped(request_client, loader, snapshot) -> None:
    poller = make_poller(request_client, loader, snapshot, interval_sec=0.01)

    poller.start()
    deadline = time.monotonic() + 2.0
    while snapshot.merge_count < 2 and time.monotonic() < deadline:
        time.sleep(0.01)
    poller.stop()

    assert poller.stopped
    assert snapshot.get("Spindle Speed") == "8000"


def test_status_file_transport_error_skips_only_that_file(request_client, loader, snapshot) -> None:
    poller = make_poller(request_client, loader, snapshot, status_every_cycles=1)
    request_client.failing.add("TOLNM1")

    for _ in range(3):
        assert poller.run_cycle() is True

    assert poller.cycle == 3
    assert poller.consecutive_failures == 0
    assert poller.status_file_failures == 3
    assert request_client.loaded().count("ATCTL") == 3
    assert request_client.loaded().count("MCRNM1") == 3
    assert snapshot.get("ATC Spindle Tool Number") == "5"
    assert snapshot.get("ATC Pot 3 Tool Name") == ""
    assert snapshot.get("Tool 5 Name") is None


def test_fast_stream_transport_error_fails_cycle(request_client, loader, snapshot) -> None:
    poller = make_poller(request_client, loader, snapshot)
    poller.run_cycle()
    request_client.failing.add("PDSP")

    assert poller.run_cycle() is False
    assert poller.consecutive_failures == 1
    assert poller.cycle == 1
