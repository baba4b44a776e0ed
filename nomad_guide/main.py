import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from nomad_guide import __version__
from nomad_guide.config import settings
from nomad_guide.routers import ajax, dashboard, health

logger = logging.getLogger(__name__)

app = FastAPI(title="Nomad Visa Guide", version=__version__)

app.state.limiter = ajax.limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(ajax.router)
app.include_router(dashboard.router)


@app.on_event("startup")
async def startup():
    logger.info("Nomad Visa Guide is running")
