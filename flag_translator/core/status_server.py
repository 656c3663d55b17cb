"""Small aiohttp status server for uptime monitors."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
import os
import platform
from typing import Callable, Optional

from aiohttp import web

from flag_translator import __version__
from flag_translator.language_context.flag_map import LanguageDirectory

from .reaction_orchestrator import ReactionOrchestrator


logger = logging.getLogger(__name__)

ENDPOINTS = ["/", "/health", "/ping", "/languages", "/stats"]


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _format_uptime(seconds: int) -> str:
    return f"{seconds // 3600}h {(seconds % 3600) // 60}m {seconds % 60}s"


class StatusServer:
    """Exposes bot health, supported flags and translation counters over HTTP."""

    def __init__(
        self,
        *,
        orchestrator: ReactionOrchestrator,
        directory: LanguageDirectory,
        is_ready: Callable[[], bool],
        bot_name: Callable[[], Optional[str]] = lambda: None,
        latency: Callable[[], Optional[float]] = lambda: None,
        host: str = "0.0.0.0",
        port: int = 5000,
    ) -> None:
        self._orchestrator = orchestrator
        self._directory = directory
        self._is_ready = is_ready
        self._bot_name = bot_name
        self._latency = latency
        self._host = host
        self._port = port
        self._runner: Optional[web.AppRunner] = None
        self.app = self._build_app()

    def _build_app(self) -> web.Application:
        app = web.Application(middlewares=[self._error_middleware])
        app.add_routes(
            [
                web.get("/", self.root),
                web.get("/health", self.health),
                web.get("/ping", self.ping),
                web.get("/languages", self.languages),
                web.get("/stats", self.stats),
            ]
        )
        return app

    @web.middleware
    async def _error_middleware(self, request: web.Request, handler):
        logger.debug("%s %s from %s", request.method, request.path, request.remote)
        try:
            return await handler(request)
        except web.HTTPNotFound:
            return web.json_response(
                {
                    "status": "error",
                    "message": "Endpoint not found",
                    "availableEndpoints": ENDPOINTS,
                    "timestamp": _timestamp(),
                },
                status=404,
            )
        except web.HTTPException:
            raise
        except Exception:
            logger.exception("Status endpoint %s failed", request.path)
            return web.json_response(
                {"status": "error", "message": "Internal server error", "timestamp": _timestamp()},
                status=500,
            )

    # --------------------------------------------------------------
    # Routes
    # --------------------------------------------------------------

    async def root(self, request: web.Request) -> web.Response:
        snapshot = self._orchestrator.status_snapshot()
        uptime = snapshot["uptime_seconds"]
        return web.json_response(
            {
                "status": "OK",
                "message": "Flag translator is running",
                "version": __version__,
                "uptime": _format_uptime(uptime),
                "uptimeSeconds": uptime,
                "bot": {
                    "connected": self._is_ready(),
                    "username": self._bot_name() or "Not connected",
                    "supportedFlags": len(self._directory),
                },
                "performance": {
                    "translationsProcessed": snapshot["translations_processed"],
                    "duplicatesPrevented": snapshot["duplicates_prevented"],
                    "errorsHandled": snapshot["errors_handled"],
                    "cacheSize": snapshot["cache_size"],
                },
                "system": {
                    "python": platform.python_version(),
                    "platform": platform.system().lower(),
                    "pid": os.getpid(),
                },
                "timestamp": _timestamp(),
            }
        )

    async def health(self, request: web.Request) -> web.Response:
        healthy = self._is_ready()
        latency = self._latency()
        return web.json_response(
            {
                "status": "healthy" if healthy else "unhealthy",
                "bot": {
                    "connected": healthy,
                    "latencyMs": round(latency * 1000) if latency is not None else None,
                },
                "server": {"port": self._port, "timestamp": _timestamp()},
            },
            status=200 if healthy else 503,
        )

    async def ping(self, request: web.Request) -> web.Response:
        return web.Response(text="pong")

    async def languages(self, request: web.Request) -> web.Response:
        entries = [{"emoji": emoji, "code": code, "name": name} for emoji, code, name in self._directory.flags()]
        entries.sort(key=lambda item: item["name"])
        return web.json_response({"total": len(entries), "languages": entries})

    async def stats(self, request: web.Request) -> web.Response:
        snapshot = self._orchestrator.status_snapshot()
        return web.json_response(
            {
                "performance": {
                    "translationsProcessed": snapshot["translations_processed"],
                    "duplicatesPrevented": snapshot["duplicates_prevented"],
                    "errorsHandled": snapshot["errors_handled"],
                },
                "cache": {"size": snapshot["cache_size"], "entries": snapshot["cache_entries"]},
                "uptime": snapshot["uptime_seconds"],
            }
        )

    # --------------------------------------------------------------
    # Lifecycle
    # --------------------------------------------------------------

    async def start(self) -> None:
        if self._runner is not None:
            return
        self._runner = web.AppRunner(self.app)
        await self._runner.setup()
        site = web.TCPSite(self._runner, host=self._host, port=self._port)
        await site.start()
        logger.info("Status server listening on http://%s:%s/", self._host, self._port)

    async def stop(self) -> None:
        if self._runner is None:
            return
        await self._runner.cleanup()
        self._runner = None
        logger.info("Status server stopped")


__all__ = ["StatusServer", "ENDPOINTS"]
