# File: app/web/spa.py

"""
Serves the pre-built frontend bundle with SPA fallback routing: any GET that
is not an API call and not a real file gets ``index.html``.
"""

import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class SPAStaticFiles(StaticFiles):
    def __init__(self, *args, api_prefix: str = "/api", **kwargs):
        self.api_prefix = api_prefix.strip("/")
        super().__init__(*args, **kwargs)

    def _is_api_path(self, path: str) -> bool:
        path = path.strip("/")
        return path == self.api_prefix or path.startswith(self.api_prefix + "/")

    async def get_response(self, path: str, scope):
        if self._is_api_path(path):
            raise StarletteHTTPException(status_code=404)
        try:
            return await super().get_response(path, scope)
        except StarletteHTTPException as exc:
            if exc.status_code != 404:
                raise
            return await super().get_response("index.html", scope)


def mount_frontend(app: FastAPI, dist_dir: str, api_prefix: str = "/api") -> bool:
    """
    Mount the bundle at ``/`` if ``dist_dir`` holds an ``index.html``.

    Must run after the API routers are included so they match first.
    """
    dist = Path(dist_dir)
    if not (dist / "index.html").is_file():
        logger.info("Frontend bundle not found at %s; serving API only", dist)
        return False

    app.mount("/", SPAStaticFiles(directory=str(dist), html=True, api_prefix=api_prefix), name="frontend")
    logger.info("Serving frontend from %s", dist.resolve())
    return True
