from __future__ import annotations

import logging
import os

import uvicorn

from taskmind.api.app import create_app
from taskmind.config import load_settings


def main() -> None:
    """Entry point for the HTTP server."""
    pid = os.getpid()

    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - [PID:%(process)d] - %(message)s'
    )
    logger = logging.getLogger(__name__)

    logger.info("=" * 60)
    logger.info(f"TaskMind starting - PID: {pid}")
    logger.info("=" * 60)

    try:
        app = create_app(settings)
        logger.info(f"Serving on http://{settings.host}:{settings.port}")
        uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    except KeyboardInterrupt:
        logger.info(f"TaskMind stopped by user - PID: {pid}")
    except Exception:
        logger.error(f"TaskMind crashed - PID: {pid}", exc_info=True)
        raise
    finally:
        logger.info(f"TaskMind shutdown complete - PID: {pid}")


if __name__ == "__main__":
    main()
