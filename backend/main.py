"""FastAPI backend application entry point.

This module builds the application with the factory and serves it with
uvicorn.
"""

import os

import uvicorn

from backend.app_factory import create_app
from visual_dna.config.server import DEFAULT_API_HOST, DEFAULT_API_PORT

# This global 'app' variable is what uvicorn looks for
app = create_app()


def main() -> None:
    """Run the application using uvicorn when executed directly."""
    host = os.getenv("VISUAL_DNA_API_HOST", DEFAULT_API_HOST)
    port = int(os.getenv("VISUAL_DNA_API_PORT", str(DEFAULT_API_PORT)))
    reload = os.getenv("VISUAL_DNA_RELOAD", "false").lower() == "true"

    uvicorn.run(
        "backend.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=os.getenv("VISUAL_DNA_LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
