"""
voxbrowse Server

Runs the voice command layer as an HTTP service with:
- REST API for parsing and executing transcripts
- WebSocket for streaming transcripts and results
"""

import argparse
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware

from .api import router
from .browser import BrowserBackend, create_backend
from .config import (
    API_HOST, API_PORT, BROWSER_BACKEND, LOG_LEVEL,
    configure_logging, validate_config,
)
from .core import VoxEngine, VoiceSession, SpeechOutput

logger = logging.getLogger(__name__)


class VoxServer:
    """
    HTTP front end for a voice session.

    Owns the backend lifecycle: the browser is started when the app starts
    and stopped (after the session settles) when it shuts down.
    """

    def __init__(self, backend: Optional[BrowserBackend] = None,
                 speech: Optional[SpeechOutput] = None,
                 host: str = API_HOST, port: int = API_PORT):
        self.host = host
        self.port = port
        self.backend = backend or create_backend(BROWSER_BACKEND)
        self.session = VoiceSession(VoxEngine(self.backend), speech=speech)
        self.app = self._create_app()

    def _create_app(self) -> FastAPI:
        """Create FastAPI application."""

        @asynccontextmanager
        async def lifespan(app: FastAPI):
            # Startup
            logger.info("voxbrowse server starting...")
            await self.backend.start()
            app.state.session = self.session
            yield
            # Shutdown
            logger.info("voxbrowse server stopping...")
            await self.session.stop()
            await self.backend.stop()

        app = FastAPI(
            title="voxbrowse API",
            version="0.1.0",
            lifespan=lifespan
        )

        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        app.include_router(router)

        # WebSocket endpoint: one transcript in, one result out
        @app.websocket("/ws")
        async def websocket_endpoint(websocket: WebSocket):
            await websocket.accept()
            try:
                while True:
                    text = await websocket.receive_text()
                    result = await self.session.engine.process(text)
                    await websocket.send_json(result.to_dict())
            except WebSocketDisconnect:
                logger.debug("WebSocket client disconnected")

        return app

    def run(self):
        """Run the server."""
        uvicorn.run(
            self.app,
            host=self.host,
            port=self.port,
            log_level=LOG_LEVEL.lower(),
        )


def create_app(backend: Optional[BrowserBackend] = None,
               speech: Optional[SpeechOutput] = None) -> FastAPI:
    """Build an application around a backend (memory by config default)."""
    return VoxServer(backend=backend, speech=speech).app


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run the voxbrowse HTTP API")
    parser.add_argument("--host", default=API_HOST)
    parser.add_argument("--port", type=int, default=API_PORT)
    parser.add_argument("--backend", default=BROWSER_BACKEND, choices=["memory", "playwright"])
    args = parser.parse_args(argv)

    configure_logging()
    for problem in validate_config():
        logger.warning(problem)

    VoxServer(backend=create_backend(args.backend), host=args.host, port=args.port).run()


if __name__ == "__main__":
    main()
