from __future__ import annotations

import logging
from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

BikeCount = Annotated[int, Field(strict=True, ge=0)]


class _StationRow(BaseModel):
    model_config = ConfigDict(extra="ignore")

    station_id: str

    @field_validator("station_id", mode="before")
    @classmethod
    def coerce_station_id(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class StationInformation(_StationRow):
    """Only the station id is read; names, coordinates and capacity are ignored."""


class StationStatus(_StationRow):
    num_bikes_available: BikeCount | None = None


_Row = TypeVar("_Row", bound=_StationRow)


def _stations(payload: dict[str, Any]) -> list[Any]:
    data = payload.get("data", {})
    if not isinstance(data, dict):
        return []
    stations = data.get("stations", [])
    if not isinstance(stations, list):
        return []
    return stations


def _parse_rows(payload: dict[str, Any], model: type[_Row]) -> list[_Row]:
    rows: list[_Row] = []
    skipped = 0
    for raw in _stations(payload):
        try:
            rows.append(model.model_validate(raw))
        except ValidationError as exc:
            skipped += 1
            logger.debug("Skipping %s row: %s", model.__name__, exc.errors())
    if skipped:
        logger.info("Skipped %d malformed %s rows", skipped, model.__name__)
    return rows


def station_information_data(payload: dict[str, Any]) -> list[StationInformation]:
    return _parse_rows(payload, StationInformation)


def station_status_data(payload: dict[str, Any]) -> list[StationStatus]:
    return _parse_rows(payload, StationStatus)


def station_counts(
    information: list[StationInformation], statuses: list[StationStatus]
) -> dict[str, int | None]:
    """Map every known station id to its live bike count.

    Stations listed in the information feed without a usable status row map
    to ``None`` and are skipped by ingestion.
    """
    latest = {status.station_id: status.num_bikes_available for status in statuses}
    return {station.station_id: latest.get(station.station_id) for station in information}
