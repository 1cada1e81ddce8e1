"""Static frontend serving with single-page-app fallback."""

import logging
from pathlib import Path

from starlette.exceptions import HTTPException
from starlette.responses import Response
from starlette.staticfiles import StaticFiles
from starlette.types import Scope

logger = logging.getLogger(__name__)

DEFAULT_WEB_BUILD_DIR = Path(__file__).resolve().parent.parent.parent / "web" / "build"
ENTRY_DOCUMENT = "index.html"


class SPAStaticFiles(StaticFiles):
    """StaticFiles that answers unknown paths with the entry document.

    Lets the frontend router handle deep links such as /profile.
    """

    def __init__(self, *args, entry_document: str = ENTRY_DOCUMENT, **kwargs):
        kwargs.setdefault("html", True)
        super().__init__(*args, **kwargs)
        self.entry_document = entry_document

    async def get_response(self, path: str, scope: Scope) -> Response:
        try:
            response = await super().get_response(path, scope)
        except HTTPException as exc:
            if exc.status_code != 404:
                raise
            return await self._entry_response(path, scope)

        if response.status_code == 404:
            return await self._entry_response(path, scope)
        return response

    async def _entry_response(self, path: str, scope: Scope) -> Response:
        logger.debug(f"Static path {path!r} not found, serving {self.entry_document}")
        return await super().get_response(self.entry_document, scope)
