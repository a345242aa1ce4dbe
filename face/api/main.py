"""FastAPI app for the agent status dashboard."""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from face.core import Dashboard, Heartbeat
from face.core.watcher import ConfigWatcher
from face.lib import config as face_config
from face.lib import store

from . import activity, errors, live, settings, status, uptime

SECURITY_HEADERS = {
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains; preload",
    "Content-Security-Policy": (
        "default-src 'self'; script-src 'self' 'unsafe-inline'; style-src 'self' 'unsafe-inline'; "
        "img-src 'self' data: https:; font-src 'self' https:; connect-src 'self' ws: wss:; "
        "frame-ancestors 'none';"
    ),
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "camera=(), microphone=(), geolocation=()",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    cfg = app.state.config
    if app.state.dashboard is None:
        app.state.dashboard = Dashboard.from_config(cfg)
    dashboard = app.state.dashboard

    heartbeat = Heartbeat(dashboard.working_since, dashboard.hub, cfg.heartbeat_interval)
    heartbeat.start()

    watcher = None
    if cfg.watch_config:
        watcher = ConfigWatcher(
            dashboard.documents.path(store.CONFIG), dashboard.reload_config, asyncio.get_running_loop()
        )
        watcher.start()

    try:
        yield
    finally:
        await heartbeat.stop()
        if watcher is not None:
            watcher.stop()


def create_app(
    dashboard: Dashboard | None = None, cfg: face_config.ServerConfig | None = None
) -> FastAPI:
    cfg = cfg or face_config.load_config()

    app = FastAPI(title="Face API", lifespan=lifespan)
    app.state.config = cfg
    app.state.dashboard = dashboard

    app.add_middleware(GZipMiddleware, minimum_size=1000, compresslevel=6)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        return response

    @app.get("/api/health")
    async def health_check(request: Request):
        return request.app.state.dashboard.health()

    for module in (status, uptime, errors, activity, settings, live):
        app.include_router(module.router)

    return app


app = create_app()

