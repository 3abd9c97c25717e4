from __future__ import annotations

import asyncio
import logging

import uvicorn

from essaytrace.config import load_settings
from essaytrace.logging_config import setup_logging
from essaytrace.web.app import create_web_app

logger = logging.getLogger("essaytrace.main")

async def run_web(settings):
    app = create_web_app(settings=settings)
    config = uvicorn.Config(app, host=settings.web_host, port=settings.web_port, log_level=settings.log_level.lower())
    server = uvicorn.Server(config)
    await server.serve()

async def main():
    settings = load_settings()
    setup_logging(settings.log_level)

    logger.info("Overlap report server listening on %s:%s", settings.web_host, settings.web_port)
    logger.info("min_match_words=%d max_tokens=%s", settings.min_match_words, settings.max_tokens)

    await run_web(settings)

if __name__ == "__main__":
    asyncio.run(main())
