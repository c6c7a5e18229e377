#!/usr/bin/env python3
"""
Startup script for the Task Keeper backend
This script starts the FastAPI server with proper configuration
"""

import logging
import os

import uvicorn
from dotenv import load_dotenv

from taskkeeper.config.settings import configure_logging

logger = logging.getLogger(__name__)


def main():
    # Load environment variables
    load_dotenv()
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    # Server configuration
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    reload = os.getenv("RELOAD", "true").lower() == "true"

    logger.info(f"Starting Task Keeper server on {host}:{port} (reload={reload})")

    # Start the server
    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=os.getenv("LOG_LEVEL", "info").lower()
    )

if __name__ == "__main__":
    main()
