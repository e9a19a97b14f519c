import logging

from workday_zen.config import LOG_LEVEL

# Log configuration (before other imports)
# ruff: noqa: E402
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    force=True
)

import asyncio
from contextlib import asynccontextmanager
from typing import Callable

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from workday_zen import __version__
from workday_zen.api.base import api_router
from workday_zen.config import ENABLE_INPUT_LISTENER
from workday_zen.runtime import SessionRuntime, create_runtime
from workday_zen.services.activity import PynputInputBridge

logger = logging.getLogger(__name__)


def create_app(
    runtime_factory: Callable[[], SessionRuntime] = create_runtime,
    enable_input_listener: bool = ENABLE_INPUT_LISTENER,
) -> FastAPI:
    """
    Build the API application.

    The runtime is created and booted inside the lifespan so that every
    timer and task it schedules lives on the server's event loop.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        runtime = runtime_factory()
        runtime.boot()
        app.state.runtime = runtime

        bridge = None
        if enable_input_listener:
            bridge = PynputInputBridge(runtime.input_source, asyncio.get_running_loop())
            bridge.start()

        try:
            yield
        finally:
            if bridge is not None:
                bridge.stop()
            await runtime.shutdown()
            app.state.runtime = None

    app = FastAPI(
        title="WorkDay Zen API",
        description="Workday session timer with activity auto-start and midnight reset",
        version=__version__,
        lifespan=lifespan,
    )

    # The host window is served from a local origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include all API routes
    app.include_router(api_router)

    @app.get("/")
    def read_root():
        return {
            "message": "WorkDay Zen API",
            "docs": "/docs",
            "version": __version__
        }

    return app


app = create_app()


def run() -> None:
    """Console entry point"""
    uvicorn.run("workday_zen.main:app", host="127.0.0.1", port=8765)
