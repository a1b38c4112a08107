import logging
from typing import Optional

from .cwa_client import CWAClient
from .errors import BadRequest, LocationNotFound, ServerMisconfigured
from .forecast import first_location, transform_location
from .schemas import WeatherResult
from .settings import Settings

logger = logging.getLogger(__name__)


async def lookup_weather(location: Optional[str], settings: Settings, client: CWAClient) -> WeatherResult:
    """Validate the request, query CWA and reshape the forecast.

    Raises
    ------
    BadRequest
        If `location` is missing or blank.
    ServerMisconfigured
        If no CWA API key is configured. No outbound request is made.
    LocationNotFound
        If CWA returns no record for `location`.
    UpstreamError, NetworkError
        Propagated from `CWAClient.get_forecast`.
    """

    if not location or not location.strip():
        raise BadRequest("Please provide the location parameter, e.g. ?location=臺北市")
    if not settings.cwa_api_key:
        raise ServerMisconfigured("CWA_API_KEY is not set; add it to the environment or the .env file")

    payload = await client.get_forecast(location)
    record = first_location(payload)
    if record is None:
        logger.info("No CWA record for %r", location)
        raise LocationNotFound(f"No weather data found for '{location}', please check the county/city name")

    update_time = (payload.get("records") or {}).get("datasetDescription") or ""
    return transform_location(record, update_time)
