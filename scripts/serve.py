#!/usr/bin/env python3
"""
Run the Command API with uvicorn.

Host and port come from API_HOST / API_PORT (default 127.0.0.1:8000). The
remaining settings are read by the app lifespan hook.

Usage:
    python -m scripts.serve
"""

import logging

import uvicorn
from dotenv import load_dotenv

from src.config.settings import Settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def build_server_config(settings: Settings) -> uvicorn.Config:
    """Uvicorn configuration for the app at the configured address"""
    return uvicorn.Config(
        "src.app:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level="info",
    )


def main() -> None:
    load_dotenv()
    settings = Settings.from_env()
    server = uvicorn.Server(build_server_config(settings))

    logger.info(f"Starting Command API on {settings.api_host}:{settings.api_port}")
    server.run()


if __name__ == "__main__":
    main()
