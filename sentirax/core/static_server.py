"""
Static asset server for the browser build.

Serves a fixed allow-list of files from the web root. Anything outside the
list, and any file that cannot be read, is a plain-text 404. Requests share
no state beyond the immutable allow-list, so there is no locking.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from pathlib import Path
from typing import Dict, Mapping, Optional

from aiohttp import web

from sentirax.core.errors import AssetNotFound

logger = logging.getLogger(__name__)


MIME_TYPES: Dict[str, str] = {
    ".html": "text/html; charset=utf-8",
    ".css": "text/css; charset=utf-8",
    ".js": "application/javascript; charset=utf-8",
    ".json": "application/json; charset=utf-8",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".svg": "image/svg+xml",
    ".ico": "image/x-icon",
}
DEFAULT_MIME_TYPE = "application/octet-stream"

ALLOWED_FILES: Mapping[str, str] = {
    "/": "index.html",
    "/index.html": "index.html",
    "/results.html": "results.html",
    "/app.js": "app.js",
}

NOT_FOUND_BODY = "Not found"


def content_type_for(path: Path) -> str:
    return MIME_TYPES.get(path.suffix.lower(), DEFAULT_MIME_TYPE)


class StaticAssetServer:
    def __init__(
        self,
        web_root: Path,
        *,
        host: str = "0.0.0.0",
        port: int = 5173,
        allowed_files: Optional[Mapping[str, str]] = None,
    ):
        self._web_root = Path(web_root)
        self._host = host
        self._port = int(port)
        self._allowed_files = dict(allowed_files or ALLOWED_FILES)
        self._thread: Optional[threading.Thread] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._runner: Optional[web.AppRunner] = None
        self._started = threading.Event()
        self._start_error: Optional[Exception] = None
        # Metrics
        self._total_requests = 0
        self._not_found = 0

    @property
    def port(self) -> int:
        return self._port

    @property
    def base_url(self) -> str:
        host = "localhost" if self._host in ("0.0.0.0", "") else self._host
        return f"http://{host}:{self._port}"

    def get_metrics(self) -> dict:
        return {
            "total_requests": self._total_requests,
            "not_found": self._not_found,
        }

    # ------------------------------------------------------------------
    # Request handling
    # ------------------------------------------------------------------

    def create_app(self) -> web.Application:
        app = web.Application()
        app.router.add_route("*", "/{tail:.*}", self._handle_asset)
        return app

    def resolve(self, request_path: str) -> Path:
        """
        Map a request path to a file under the web root.

        Raises:
            AssetNotFound: path is not in the allow-list
        """
        file_name = self._allowed_files.get(request_path)
        if not file_name:
            raise AssetNotFound(request_path)
        return self._web_root / file_name

    async def _read_asset(self, request_path: str) -> tuple[Path, bytes]:
        file_path = self.resolve(request_path)
        try:
            data = await asyncio.to_thread(file_path.read_bytes)
        except OSError as e:
            # Missing file and other read errors are reported the same way.
            logger.warning(f"Failed to read {file_path}: {e}")
            raise AssetNotFound(request_path) from e
        return file_path, data

    async def _handle_asset(self, request: web.Request) -> web.Response:
        self._total_requests += 1
        try:
            file_path, data = await self._read_asset(request.path)
        except AssetNotFound:
            self._not_found += 1
            logger.debug(f"404 {request.method} {request.path}")
            return self._not_found_response()

        logger.debug(f"200 {request.method} {request.path} -> {file_path.name} ({len(data)} bytes)")
        return web.Response(
            status=200,
            body=data,
            headers={"Content-Type": content_type_for(file_path)},
        )

    @staticmethod
    def _not_found_response() -> web.Response:
        return web.Response(
            status=404,
            body=NOT_FOUND_BODY.encode("utf-8"),
            headers={"Content-Type": "text/plain; charset=utf-8"},
        )

    # ------------------------------------------------------------------
    # Background thread lifecycle (desktop app)
    # ------------------------------------------------------------------

    def start(self, timeout_s: float = 3.0) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._started.clear()
        self._start_error = None
        self._thread = threading.Thread(target=self._run, name="static-assets", daemon=True)
        self._thread.start()
        if not self._started.wait(timeout_s):
            raise RuntimeError("Static asset server failed to start (timeout)")
        if self._start_error:
            raise self._start_error

    def stop(self) -> None:
        loop = self._loop
        if not loop:
            return
        loop.call_soon_threadsafe(loop.stop)
        if self._thread:
            self._thread.join(timeout=5)
        self._thread = None

    def _run(self) -> None:
        self._loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self._loop)
        try:
            self._loop.run_until_complete(self._start_async())
        except Exception as exc:
            self._start_error = exc
        finally:
            self._started.set()
        if self._start_error:
            self._loop.close()
            self._loop = None
            return
        try:
            self._loop.run_forever()
        finally:
            try:
                self._loop.run_until_complete(self._shutdown_async())
            except Exception as e:
                logger.warning(f"Error during static server shutdown: {e}")
            self._loop.close()
            self._loop = None

    async def _start_async(self) -> None:
        self._runner = web.AppRunner(self.create_app(), access_log=None)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self._host, self._port)
        await site.start()
        if site._server and site._server.sockets:
            sock = site._server.sockets[0]
            self._port = int(sock.getsockname()[1])
        logger.info(f"Web server running at {self.base_url} (root: {self._web_root})")

    async def _shutdown_async(self) -> None:
        if self._runner:
            await self._runner.cleanup()
            self._runner = None

    # ------------------------------------------------------------------
    # Foreground mode (`sentirax serve`)
    # ------------------------------------------------------------------

    def run(self) -> None:
        """Serve until interrupted."""
        logger.info(f"Web server running at {self.base_url} (root: {self._web_root})")
        web.run_app(
            self.create_app(),
            host=self._host,
            port=self._port,
            print=None,
            access_log=None,
        )
