from __future__ import annotations

from bikeflow.core.deltas import derive, derive_by_station
from bikeflow.core.models import DeltaEvent, History, Sample
from bikeflow.core.windows import sum_window


def test_derive_empty_for_short_series() -> None:
    assert derive([]) == []
    assert derive([Sample(t=0, bikes=5)]) == []


def test_derive_suppresses_unchanged_counts() -> None:
    series = [Sample(t=0, bikes=5), Sample(t=300_000, bikes=5), Sample(t=600_000, bikes=5)]

    assert derive(series) == []


def test_derive_signed_deltas_at_later_sample() -> None:
    series = [
        Sample(t=0, bikes=10),
        Sample(t=300_000, bikes=7),
        Sample(t=600_000, bikes=9),
    ]

    deltas = derive(series)

    assert deltas == [DeltaEvent(t=300_000, delta=-3), DeltaEvent(t=600_000, delta=2)]
    assert sum_window(deltas, 0, 600_000) == -1


def test_derive_by_station_skips_stations_without_two_samples() -> None:
    history = History(
        stations={
            "one": [Sample(t=0, bikes=1)],
            "two": [Sample(t=0, bikes=1), Sample(t=300_000, bikes=3)],
            "flat": [Sample(t=0, bikes=2), Sample(t=300_000, bikes=2)],
        }
    )

    grouped = derive_by_station(history, ["one", "two", "flat", "missing"])

    assert grouped == {"two": [DeltaEvent(t=300_000, delta=2)], "flat": []}
