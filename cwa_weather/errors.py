from typing import Any, Dict, Optional


class WeatherAPIError(Exception):
    """Base class for failures reported to the client as a JSON error body.

    Parameters
    ----------
    message : str
        Human-readable explanation returned in the `message` field.
    details : Optional[Any]
        Extra payload returned in the `details` field (omitted when `None`).

    Notes
    -----
    - Subclasses pin `status_code` and `error`; `UpstreamError` overrides the
      status per instance.
    - Rendered by the exception handler registered in `main.py`.
    """

    status_code: int = 500
    error: str = "Internal Server Error"

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"success": False, "error": self.error, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class BadRequest(WeatherAPIError):
    status_code = 400
    error = "Bad Request"


class ServerMisconfigured(WeatherAPIError):
    status_code = 500
    error = "Server Misconfigured"


class LocationNotFound(WeatherAPIError):
    status_code = 404
    error = "Location Not Found"


class UpstreamError(WeatherAPIError):
    """The CWA API answered with a non-2xx status.

    The upstream status code is forwarded as-is and its body is returned in
    `details`.
    """

    error = "CWA API Error"

    def __init__(self, status_code: int, body: Any):
        message = None
        if isinstance(body, dict):
            message = body.get("message")
        super().__init__(message or "Unable to retrieve weather data", details=body)
        self.status_code = status_code
        self.body = body


class NetworkError(WeatherAPIError):
    status_code = 500
    error = "Network Error"


class InternalError(WeatherAPIError):
    status_code = 500
    error = "Internal Server Error"
