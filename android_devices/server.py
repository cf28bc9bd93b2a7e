"""
Android Devices Bridge - FastAPI Server

HTTP/JSON front-end over the shared ADB bridge.
"""

import argparse
import logging
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from . import __version__, config
from .core.adb import ADBBridge
from .routes import set_deps
from .routes import devices, health

logger = logging.getLogger(__name__)


def create_app(adb_bridge: Optional[ADBBridge] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        adb_bridge: Bridge to serve; a default one using config.ADB_PATH is created if omitted
    """
    app = FastAPI(
        title="Android Devices Bridge API",
        version=__version__,
        description="Android device and emulator discovery over adb"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Log and return detailed validation errors"""
        logger.error(f"[VALIDATION ERROR] {request.method} {request.url}: {exc.errors()}")
        return JSONResponse(
            status_code=422,
            content={
                "success": False,
                "detail": exc.errors(),
            }
        )

    set_deps(adb_bridge or ADBBridge(adb_path=config.ADB_PATH))

    app.include_router(devices.router)
    app.include_router(health.router)
    return app


def main(argv=None):
    parser = argparse.ArgumentParser(description="Android Devices Bridge - HTTP server")
    parser.add_argument('--adb', default=config.ADB_PATH, help='adb executable (default: %(default)s)')
    parser.add_argument('--host', default=config.HOST, help='Bind address (default: %(default)s)')
    parser.add_argument('--port', type=int, default=config.PORT, help='Port (default: %(default)s)')
    parser.add_argument('--log-level', default=config.LOG_LEVEL, help='Logging level (default: %(default)s)')
    args = parser.parse_args(argv)

    config.configure_logging(args.log_level)

    app = create_app(ADBBridge(adb_path=args.adb))

    logger.info(f"Starting Android Devices Bridge v{__version__}")
    logger.info(f"Server: http://localhost:{args.port}")

    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        log_level=args.log_level.lower()
    )


if __name__ == "__main__":
    main()
