"""
CLI Serve Command

Run the HTTP API with uvicorn.

Usage:
    battleship serve
    battleship serve --host 127.0.0.1 --port 8080
"""

from __future__ import annotations

import logging
from argparse import Namespace

from core.config.runtime import RuntimeConfig


logger = logging.getLogger(__name__)


EXIT_SUCCESS = 0


def serve_cmd(args: Namespace) -> int:
    """Start the API server and block until it exits."""
    import uvicorn

    from api.app import create_app

    config: RuntimeConfig = getattr(args, "runtime_config", None) or RuntimeConfig()
    if args.host:
        config.server.host = args.host
    if args.port:
        config.server.port = args.port

    app = create_app(config)
    uvicorn.run(
        app,
        host=config.server.host,
        port=config.server.port,
        log_level=config.log_level.lower(),
    )
    return EXIT_SUCCESS
