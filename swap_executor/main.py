import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .config import get_settings
from .routes import buy, health


def _setup_logging():
    """
    Configure basic logging from LOG_LEVEL.
    """
    logging.basicConfig(
        level=get_settings().LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    _setup_logging()
    s = get_settings()
    logging.getLogger(__name__).info("Starting swap executor (env=%s, chain_id=%s)", s.ENV, s.CHAIN_ID)
    try:
        yield
    finally:
        logging.getLogger(__name__).info("Shutting down swap executor...")


def create_app() -> FastAPI:
    app = FastAPI(title="BNB Swap Executor", version="0.1.0", lifespan=lifespan)
    app.include_router(health.router)
    app.include_router(buy.router)
    return app

app = create_app()
