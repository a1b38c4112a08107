import logging
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .cwa_client import CWAClient
from .errors import InternalError, WeatherAPIError
from .schemas import ErrorResponse, HealthResponse, ServiceInfo, WeatherResponse
from .service import lookup_weather
from .settings import Settings, get_settings

logging.basicConfig(
    level=getattr(logging, get_settings().log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="CWA Weather Proxy API", version="1.0.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_client(settings: Settings = Depends(get_settings)) -> CWAClient:
    """Build the upstream client from the injected settings."""

    return CWAClient.from_settings(settings)


@app.exception_handler(WeatherAPIError)
async def weather_api_error_handler(request: Request, exc: WeatherAPIError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render routing errors (unknown path, wrong method) as JSON."""

    error = HTTPStatus(exc.status_code).phrase
    message = f"No route for {request.method} {request.url.path}" if exc.status_code == 404 else str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"error": error, "message": message})


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Last-resort 500 body.

    Runs in Starlette's outermost error middleware, past `CORSMiddleware`, so
    the allow-origin header is added here.
    """

    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    headers = {}
    origin = request.headers.get("origin")
    allowed = get_settings().cors_origins
    if origin and ("*" in allowed or origin in allowed):
        headers["Access-Control-Allow-Origin"] = "*" if "*" in allowed else origin
    return JSONResponse(status_code=500, content={"error": "Internal Server Error", "message": str(exc)},
                        headers=headers)


@app.get("/", response_model=ServiceInfo)
async def root():
    """Describe the service and list its endpoints."""

    return {
        "message": "Welcome to the CWA weather forecast API",
        "endpoints": {
            "weather": "/api/weather?location=<county or city name>",
            "health": "/api/health",
        },
    }


@app.get("/api/health", response_model=HealthResponse)
async def health():
    """Liveness probe for the service.

    Returns
    -------
    dict
        `{"status": "OK", "timestamp": <ISO-8601 UTC>}` used by orchestrators
        and uptime checks.
    """

    return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}


@app.get(
    "/api/weather",
    response_model=WeatherResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def weather(
        location: Optional[str] = Query(None, description="Exact CWA county/city name, e.g. 臺北市"),
        settings: Settings = Depends(get_settings),
        client: CWAClient = Depends(get_client),
):
    """Return the 36-hour forecast for a county or city.

    Parameters
    ----------
    location : Optional[str]
        County/city name as used by CWA (`locationName`). Required; it is
        declared optional so a missing value maps to a 400 JSON error.

    Returns
    -------
    WeatherResponse
        `{"success": true, "data": {city, updateTime, forecasts}}`.

    Notes
    -----
    - Errors are rendered by `weather_api_error_handler`: 400 for a missing
      location, 404 for an unknown one, 500 for missing configuration or
      network failures, and the upstream status for CWA-reported errors.
    - Anything unexpected is logged with its traceback and answered with a
      generic 500 body.
    """

    try:
        result = await lookup_weather(location, settings, client)
    except WeatherAPIError:
        raise
    except Exception as exc:
        logger.exception("Failed to build forecast for %r", location)
        raise InternalError("Unable to retrieve weather data, please try again later") from exc
    return {"success": True, "data": result}


def run() -> None:
    import uvicorn

    settings = get_settings()
    logger.info("Starting CWA weather proxy on %s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
