from __future__ import annotations

import threading

import pytest

from brother_mtconnect.telemetry import TelemetrySnapshot


def test_merge_keeps_unrelated_fields() -> None:
    snapshot = TelemetrySnapshot()
    snapshot.merge({"A": "1"})
    snapshot.merge({"B": "2"})

    assert dict(snapshot.read()) == {"A": "1", "B": "2"}


def test_merge_overwrites_and_never_deletes() -> None:
    snapshot = TelemetrySnapshot()
    snapshot.merge({"Program name": "O1000", "Counter 1": "5"})
    snapshot.merge({"Counter 1": "6"})

    current = snapshot.read()
    assert current["Program name"] == "O1000"
    assert current["Counter 1"] == "6"


def test_read_returns_immutable_copy() -> None:
    snapshot = TelemetrySnapshot({"A": "1"})
    copy = snapshot.read()
    snapshot.merge({"A": "2"})

    assert copy["A"] == "1"
    with pytest.raises(TypeError):
        copy["A"] = "3"  # type: ignore[index]


def test_empty_merge_is_ignored() -> None:
    snapshot = TelemetrySnapshot()
    snapshot.merge({})

    assert snapshot.is_empty()
    assert snapshot.merge_count == 0


def test_concurrent_merges_are_all_visible() -> None:
    snapshot = TelemetrySnapshot()

    def writer(prefix: str) -> None:
        for index in range(200):
            snapshot.merge({f"{prefix} {index}": str(index)})

    threads = [threading.Thread(target=writer, args=(f"T{n}",)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(snapshot) == 800
