"""FastAPI application serving the MTConnect documents."""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from logging import Formatter, BASIC_FORMAT
from typing import Callable

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..configs import PublisherConfig
from ..poller import TelemetryPoller
from ..telemetry import TelemetrySnapshot
from .catalog import DeviceSpec, build_device
from .render import HeaderInfo, machine_uuid, render_current, render_probe, render_sample

logger = logging.getLogger(__name__)
handler = logging.StreamHandler()
handler.setLevel(logging.INFO)
handler.setFormatter(Formatter(BASIC_FORMAT))
logger.addHandler(handler)

XML_MEDIA_TYPE = "application/xml"
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}
ENDPOINTS = "/probe, /current, /sample"
BANNER = f"MTConnect Agent for Brother CNC\nEndpoints: {ENDPOINTS}"


def create_app(
    snapshot: TelemetrySnapshot,
    *,
    config: PublisherConfig | None = None,
    device: DeviceSpec | None = None,
    device_uuid: str | None = None,
    poller: TelemetryPoller | None = None,
) -> FastAPI:
    """Build the HTTP surface around ``snapshot``.

    When ``poller`` is given it is started and stopped with the application.
    """

    config = config or PublisherConfig()
    device = device or build_device(name=config.device_name)
    header = HeaderInfo(
        sender=config.sender,
        instance_id=config.instance_id,
        buffer_size=config.buffer_size,
    )
    device_uuid = device_uuid or machine_uuid()

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        if poller is not None:
            poller.start()
        try:
            yield
        finally:
            if poller is not None:
                poller.stop()

    app = FastAPI(title="Brother MTConnect Agent", version="0.1.0", lifespan=lifespan)

    @app.middleware("http")
    async def cors(request: Request, call_next) -> Response:
        # Preflight requests are answered here with an empty body.
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    def xml_response(render: Callable[[], str]) -> Response:
        try:
            body = render()
        except Exception as exc:
            logger.exception("Failed to render MTConnect document")
            return PlainTextResponse(
                f"500 Internal Server Error: {exc}", status_code=500
            )
        return Response(content=body, media_type=XML_MEDIA_TYPE)

    def streams(render: Callable[..., str]) -> Response:
        return xml_response(
            lambda: render(snapshot.read(), device, device_uuid=device_uuid, header=header)
        )

    @app.get("/", response_class=PlainTextResponse)
    def banner() -> PlainTextResponse:
        return PlainTextResponse(BANNER)

    @app.get("/probe")
    @app.get("/probe/", include_in_schema=False)
    def probe() -> Response:
        return xml_response(lambda: render_probe(device, device_uuid=device_uuid, header=header))

    @app.get("/current")
    @app.get("/current/", include_in_schema=False)
    def current() -> Response:
        return streams(render_current)

    @app.get("/sample")
    @app.get("/sample/", include_in_schema=False)
    def sample() -> Response:
        return streams(render_sample)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(_request: Request, exc: StarletteHTTPException) -> Response:
        if exc.status_code == 404:
            return PlainTextResponse(
                f"404 Not Found\nAvailable endpoints: {ENDPOINTS}",
                status_code=404,
            )
        return PlainTextResponse(
            f"{exc.status_code} {exc.detail}", status_code=exc.status_code
        )

    return app
