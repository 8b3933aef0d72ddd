import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from qrlink_app.api import qr, redirect, urls
from qrlink_app.config import settings
from qrlink_app.dependencies import get_database
from qrlink_app.errors import register_exception_handlers

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("qrlink_app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Open the shared connection and create tables before serving requests
    database = get_database()
    logger.info("%s %s started (%s)", settings.app_name, settings.app_version, settings.environment)
    yield
    database.close()
    get_database.cache_clear()


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="URL shortener that serves redirects, metadata and QR codes",
    debug=settings.debug,
    lifespan=lifespan,
)
register_exception_handlers(app)


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "environment": settings.environment}


######## Include routers
# Routers go last: /{url_id} would otherwise match /health
app.include_router(urls.router)
app.include_router(qr.router)
app.include_router(redirect.router)


if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port)
