import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from news_api.config import settings
from news_api.database import engine
from news_api.error_handlers import register_error_handlers
from news_api.middleware import RequestTimingMiddleware
from news_api.routers import api, articles, topics, users

VERSION = "1.0.0"

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    configure_logging()
    logger.info("News API %s starting (env=%s)", VERSION, settings.APP_ENV)
    yield
    # Shutdown
    await engine.dispose()


app = FastAPI(
    title="News API",
    description="Topics, articles, comments and users over a relational store",
    version=VERSION,
    lifespan=lifespan,
    # "/api/topics/" is not "/api/topics": no redirect, just "Route not found"
    redirect_slashes=False,
)

# Middleware
app.add_middleware(RequestTimingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Routers; first match wins, anything unmatched falls through to the
# "Route not found" handler.
app.include_router(api.router)
app.include_router(topics.router)
app.include_router(articles.router)
app.include_router(users.router)


@app.get("/health")
async def health():
    return {"status": "healthy", "version": VERSION}
