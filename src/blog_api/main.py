"""FastAPI application entry point."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from blog_api.routers import articles, cron, health
from common.cli_helpers import setup_logging
from common.errors import AuthorizationError
from common.settings import get_config

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Release Notes Blog API",
    description="Cron triggers for the content pipeline and read access to published articles",
    version="1.0.0",
)

# Register routers
app.include_router(health.router)
app.include_router(articles.router)
app.include_router(cron.router)


@app.exception_handler(AuthorizationError)
async def authorization_error_handler(request: Request, exc: AuthorizationError):
    logger.warning("Unauthorized request to %s", request.url.path)
    return JSONResponse(status_code=401, content={"error": "Unauthorized"})


@app.get("/")
async def root():
    """API root - returns basic info."""
    return {
        "name": "Release Notes Blog API",
        "version": "1.0.0",
        "docs": "/docs",
    }


def main():
    """Run the API server."""
    import uvicorn

    config = get_config()
    uvicorn.run(
        "blog_api.main:app",
        host=config.server.host,
        port=config.server.port,
    )


if __name__ == "__main__":
    main()
