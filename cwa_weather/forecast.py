from typing import Any, Dict, Optional

from .schemas import ForecastPeriod, WeatherResult

# CWA element code -> ForecastPeriod field
ELEMENT_FIELDS: Dict[str, str] = {
    "Wx": "weather",
    "PoP": "rain",
    "MinT": "minTemp",
    "MaxT": "maxTemp",
    "CI": "comfort",
    "WS": "windSpeed",  # not part of F-C0032-001, mapped when present
}


def first_location(payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Return `records.location[0]` from a CWA payload, or `None` if empty.

    A `locationName` query is an exact match, so at most one record is
    expected; extra records are ignored.
    """

    locations = (payload.get("records") or {}).get("location") or []
    return locations[0] if locations else None


def transform_location(record: Dict[str, Any], update_time: str) -> WeatherResult:
    """Flatten one CWA location record into an ordered list of periods.

    Parameters
    ----------
    record : Dict[str, Any]
        One entry of `records.location`.
    update_time : str
        Value copied into `WeatherResult.updateTime` (the dataset description).

    Returns
    -------
    WeatherResult
        One `ForecastPeriod` per time slot of the first weather element, in
        upstream order.

    Notes
    -----
    - All elements are assumed to share the first element's time axis; a
      missing slot in a shorter element is skipped.
    - Element codes outside `ELEMENT_FIELDS` are ignored.
    """

    elements = record.get("weatherElement") or []
    axis = elements[0].get("time", []) if elements else []

    forecasts = []
    for i, slot in enumerate(axis):
        fields = {"startTime": _text(slot.get("startTime")), "endTime": _text(slot.get("endTime"))}
        for element in elements:
            field = ELEMENT_FIELDS.get(element.get("elementName"))
            slots = element.get("time", [])
            if field is None or i >= len(slots):
                continue
            fields[field] = _text((slots[i].get("parameter") or {}).get("parameterName"))
        forecasts.append(ForecastPeriod(**fields))

    return WeatherResult(city=_text(record.get("locationName")), updateTime=update_time, forecasts=forecasts)


def _text(value: Any) -> str:
    """Upstream values as strings; `None` becomes `""`."""

    return "" if value is None else str(value)
