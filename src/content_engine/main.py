from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from content_engine.api.readiness import router as readiness_router
from content_engine.logging_config import configure_logging
from content_engine.telemetry import emit_app_startup_event

configure_logging()

app = FastAPI(title="Content Integrity Engine")
app.include_router(readiness_router)


@app.on_event("startup")
async def _startup_event() -> None:
    """Record the runtime context the service was started with."""

    emit_app_startup_event()


@app.get("/", response_class=PlainTextResponse)
def read_root() -> str:
    """Healthcheck endpoint for the service."""
    return "ok"


@app.get("/healthz", response_class=PlainTextResponse)
def healthcheck() -> str:
    """Liveness probe used by container orchestrators."""
    return "ok"
