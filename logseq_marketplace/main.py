import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from logseq_marketplace.api.catalog import router as catalog_router
from logseq_marketplace.cli import LOG_FORMAT
from logseq_marketplace.core.dependencies import get_settings, set_settings
from logseq_marketplace.core.settings import FetchSettings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[FetchSettings] = None) -> FastAPI:
    """
    Preview server for a generated marketplace: the JSON document under
    /api and the icon directory under the configured icon URL prefix.
    """
    if settings is not None:
        set_settings(settings)
    settings = get_settings()

    app = FastAPI(
        title="Logseq Marketplace Preview",
        version="0.1.0",
        description="Serves the fetched marketplace document and its icons.",
    )

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    app.include_router(catalog_router, prefix="/api", tags=["plugins"])

    # Icons may not exist until the first fetch run with icons.
    app.mount(
        settings.icons_url_prefix.rstrip("/"),
        StaticFiles(directory=settings.icons_dir, check_dir=False),
        name="icons",
    )
    logger.info(f"Serving icons from {settings.icons_dir} at {settings.icons_url_prefix}")
    return app


def serve() -> None:
    """
    Run the preview server with uvicorn on port 8000.
    """
    import uvicorn

    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    uvicorn.run(create_app(), host="127.0.0.1", port=8000)


if __name__ == "__main__":
    serve()
