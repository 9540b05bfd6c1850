import logging

logging.basicConfig(
    level=logging.INFO,
    format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
)
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from rsvp_api import lifespan as app_lifespan
from rsvp_api.config import get_settings
from rsvp_api.controllers.events import router as events_router
from rsvp_api.controllers.health import router as health_router
from rsvp_api.controllers.rsvp import router as rsvp_router
from rsvp_api.errors import register_exception_handlers
from rsvp_api.middleware import CORSHeadersMiddleware, HTTPLogMiddleware

settings = get_settings()

app = FastAPI(title="Event RSVP API", version="1.0.0")

if settings.debug.request:
    logging.getLogger("rsvp_api.http").setLevel(logging.DEBUG)
    app.add_middleware(HTTPLogMiddleware)

app.add_middleware(CORSHeadersMiddleware)

register_exception_handlers(app)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    resources = await app_lifespan.setup_resources()
    try:
        yield
    finally:
        await app_lifespan.cleanup_resources(resources)

app.router.lifespan_context = lifespan

app.include_router(health_router)
app.include_router(rsvp_router)
app.include_router(events_router)
