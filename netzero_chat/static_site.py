"""
Static file server for the built NetZero web front-end.

Unknown paths fall back to ``index.html`` so client-side routes resolve.
"""
import logging
import os

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response
from starlette.types import Scope

logger = logging.getLogger(__name__)

INDEX_FILE = "index.html"


class SPAStaticFiles(StaticFiles):
    """StaticFiles that answers missing paths with the SPA entry point."""

    async def get_response(self, path: str, scope: Scope) -> Response:
        try:
            response = await super().get_response(path, scope)
        except StarletteHTTPException as e:
            if e.status_code != 404:
                raise
            return await super().get_response(INDEX_FILE, scope)

        if response.status_code == 404:
            return await super().get_response(INDEX_FILE, scope)
        return response


def create_static_app(directory: str) -> FastAPI:
    """Create an app serving ``directory`` at the root."""
    app = FastAPI(
        title="NetZero Web",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.mount("/", SPAStaticFiles(directory=directory, html=True), name="web")
    logger.info(f"Serving files from: {os.path.abspath(directory)}")
    return app
