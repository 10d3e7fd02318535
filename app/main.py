import logging

from fastapi import Depends, FastAPI, Request, Response, status
from fastapi.responses import PlainTextResponse

from app.api.maven import fallback_router, router as maven_router
from app.core.dependencies import close_dependencies, get_catalog_cache
from app.data.config import get_config
from app.domain.errors import NotFoundError, UpstreamError
from app.services.caching import CatalogCache

config = get_config()

# Configure logging
logging.basicConfig(
    level=config.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


app = FastAPI(
    title="Launcher Maven Bridge",
    version="0.1.0",
    description="Serves the game launcher's version catalog as a Maven repository.",
)


@app.on_event("shutdown")
async def shutdown_event() -> None:
    """
    Release the upstream HTTP connection pool.
    """
    await close_dependencies()


def _plain_error(request: Request, status_code: int, marker: str) -> Response:
    if request.method == "HEAD":
        return Response(status_code=status_code)
    return PlainTextResponse(marker, status_code=status_code)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> Response:
    logger.info(f"{request.method} {request.url.path}: {exc}")
    return _plain_error(request, status.HTTP_404_NOT_FOUND, "Not Found")


@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError) -> Response:
    logger.error(f"{request.method} {request.url.path}: upstream failure: {exc}")
    return _plain_error(request, status.HTTP_502_BAD_GATEWAY, "Bad Gateway")


@app.get("/health")
async def health(catalog_cache: CatalogCache = Depends(get_catalog_cache)) -> dict:
    """
    Lightweight health check endpoint.
    """
    return {"status": "ok", "catalog": catalog_cache.status()}


app.include_router(maven_router, prefix=config.group_path, tags=["maven"])
logger.info(f"Serving Maven group {config.group_id} under {config.group_path}")

# The origin fallback matches every path, so it has to be the last route.
app.include_router(fallback_router, tags=["origin"])


if __name__ == "__main__":
    """
    Allow running `python app/main.py` to start the Uvicorn development server.
    """
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=3000,
        reload=True,
    )
