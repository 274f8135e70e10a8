#!/usr/bin/env python
"""
Start the Tasker API with uvicorn.

Usage:
    python run_api.py
    python run_api.py --reload            # Restart on code changes
    python run_api.py --port 8080
"""

import argparse
import uvicorn

from shared.config import get_settings
from shared.logging_config import configure_logging


def main():
    settings = get_settings()

    parser = argparse.ArgumentParser(description=f"Run the {settings.app_name} server")
    parser.add_argument("--reload", action="store_true", help="Reload on source changes")
    parser.add_argument("--host", default=settings.host, help=f"Bind address (default {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Port (default {settings.port})")
    args = parser.parse_args()

    configure_logging(settings.log_level)
    uvicorn.run(
        "api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload or settings.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
