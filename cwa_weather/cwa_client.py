import logging
from typing import Any, Dict, Optional

import httpx

from .errors import NetworkError, UpstreamError
from .settings import Settings

logger = logging.getLogger(__name__)


class CWAClient:
    """Thin async client for the CWA open-data forecast datastore.

    Parameters
    ----------
    api_key : str
        CWA authorization code, sent as the `Authorization` query parameter.
    base_url : str
        Base URL for the CWA API (e.g. `https://opendata.cwa.gov.tw/api`).
    dataset_id : str
        Datastore dataset to query. Defaults to the 36-hour forecast.
    timeout : float
        Per-request timeout in seconds.
    transport : Optional[httpx.AsyncBaseTransport]
        Custom transport handed to `httpx.AsyncClient`; tests pass an
        `httpx.MockTransport` here.

    Notes
    -----
    - One outbound request per call, no caching and no retries.
    - Intended for read-only workloads.
    """

    def __init__(self, api_key: str, base_url: str, dataset_id: str = "F-C0032-001",
                 timeout: float = 20.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.dataset_id = dataset_id
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "CWAClient":
        return cls(
            api_key=settings.cwa_api_key or "",
            base_url=settings.cwa_api_base_url,
            dataset_id=settings.cwa_dataset_id,
            timeout=settings.cwa_timeout,
        )

    @property
    def forecast_url(self) -> str:
        return f"{self.base_url}/v1/rest/datastore/{self.dataset_id}"

    async def get_forecast(self, location_name: str) -> Dict[str, Any]:
        """Fetch the raw forecast payload for one location name.

        Parameters
        ----------
        location_name : str
            Exact CWA location name (e.g. `臺北市`).

        Returns
        -------
        Dict[str, Any]
            Parsed JSON as returned by CWA.

        Raises
        ------
        UpstreamError
            If CWA answers with a non-2xx status. Carries the status code and
            the response body (JSON when parseable, raw text otherwise).
        NetworkError
            For transport-level errors (DNS, refused connections, timeouts).
        """

        params = {"Authorization": self.api_key, "locationName": location_name}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.get(self.forecast_url, params=params)
        except httpx.RequestError as exc:
            logger.error("CWA request for %r failed: %s", location_name, exc)
            raise NetworkError("Unable to reach the CWA API, please try again later") from exc

        logger.debug("CWA responded %s for %r", r.status_code, location_name)
        if not r.is_success:
            logger.warning("CWA returned %s for %r", r.status_code, location_name)
            raise UpstreamError(r.status_code, _response_body(r))
        return r.json()


def _response_body(r: httpx.Response) -> Any:
    try:
        return r.json()
    except ValueError:
        return r.text
