from __future__ import annotations

from collections.abc import Iterable, Sequence

from .models import DeltaEvent, History, Sample


def derive(samples: Sequence[Sample]) -> list[DeltaEvent]:
    """Turn consecutive samples into signed bike-count changes.

    Negative deltas are net pickups, positive deltas net returns. Pairs with
    an unchanged count produce nothing.
    """
    output: list[DeltaEvent] = []
    previous: Sample | None = None
    for sample in samples:
        if previous is not None:
            delta = sample.bikes - previous.bikes
            if delta != 0:
                output.append(DeltaEvent(t=sample.t, delta=delta))
        previous = sample
    return output


def derive_by_station(
    history: History, station_ids: Iterable[str]
) -> dict[str, list[DeltaEvent]]:
    grouped: dict[str, list[DeltaEvent]] = {}
    for station_id in station_ids:
        samples = history.series(station_id)
        if len(samples) < 2:
            continue
        grouped[station_id] = derive(samples)
    return grouped
