"""CLI entry point: runs the collector under uvicorn."""

from __future__ import annotations

import argparse
import logging

import uvicorn

from common.config import get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    p = argparse.ArgumentParser(description="DVL Analytics collector (tracking API + dashboard)")
    p.add_argument("--host", default=settings.host)
    p.add_argument("--port", type=int, default=settings.port)
    p.add_argument("--log-level", default=settings.log_level)
    p.add_argument("--reload", action="store_true", help="auto-reload on code changes (dev only)")
    args = p.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )

    logger.info("DVL Analytics API starting on %s:%d", args.host, args.port)
    logger.info("Dashboard: http://localhost:%d/dashboard", args.port)

    uvicorn.run(
        "collector_api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level.lower(),
    )


if __name__ == "__main__":
    main()
