from __future__ import annotations

import os

from starlette.exceptions import HTTPException
from starlette.responses import Response
from starlette.staticfiles import StaticFiles
from starlette.types import Scope

INDEX_FILE = "index.html"


# PUBLIC_INTERFACE
class SPAStaticFiles(StaticFiles):
    """
    Static file app for a single-page front-end.

    Existing files are served as-is and '/' serves index.html. Unknown paths
    without a file extension are client-side routes, so they get index.html
    too; a missing asset such as '/app.js' stays a 404.
    """

    def __init__(self, directory: str) -> None:
        super().__init__(directory=directory, html=True)

    async def get_response(self, path: str, scope: Scope) -> Response:
        try:
            return await super().get_response(path, scope)
        except HTTPException as exc:
            if exc.status_code != 404 or os.path.splitext(path)[1]:
                raise
            return await super().get_response(INDEX_FILE, scope)
