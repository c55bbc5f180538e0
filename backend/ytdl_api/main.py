"""
ytdl-api service: yt-dlp metadata over HTTP plus an image proxy.
"""

import logging
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from . import __version__
from .assets import AssetProvisioner
from .config import Settings
from .extraction import ExtractionInvoker
from .proxy import ImageProxy
from .routes import pages, proxy, ytdl

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    *,
    transport: Optional[httpx.BaseTransport] = None,
) -> FastAPI:
    """
    Create the application.

    Args:
        settings: Service configuration. Read from the environment if not provided.
        transport: Optional httpx transport for all outbound HTTP (asset
            downloads and image proxy)

    Returns:
        FastAPI application with components on app.state
    """
    settings = settings or Settings.from_env()

    # The framework's interactive docs would shadow GET /docs
    app = FastAPI(
        title="ytdl-api",
        version=__version__,
        docs_url=None,
        redoc_url=None,
    )

    app.state.settings = settings
    app.state.provisioner = AssetProvisioner(
        settings.assets,
        timeout_seconds=settings.download_timeout_seconds,
        transport=transport,
    )
    app.state.invoker = ExtractionInvoker(
        app.state.provisioner,
        timeout_seconds=settings.tool_timeout_seconds,
    )
    app.state.image_proxy = ImageProxy(
        timeout_seconds=settings.proxy_timeout_seconds,
        transport=transport,
    )

    app.include_router(pages.router)
    app.include_router(ytdl.router)
    app.include_router(proxy.router)

    # Mounted last so it only serves paths no route matched
    if settings.public_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(settings.public_dir)), name="public")
    else:
        logger.debug("Public directory %s not found; static files disabled", settings.public_dir)

    return app
