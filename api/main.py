"""
ASGI entry point.

Usage:
    uvicorn api.main:app --port 4001

    # Or run directly
    python -m api.main
"""

import logging

from api.app import create_app
from core.config.runtime import load_runtime_config


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


_config = load_runtime_config()
_configure_logging(_config.log_level)

# Create the application instance
app = create_app(_config)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=_config.server.host, port=_config.server.port)
