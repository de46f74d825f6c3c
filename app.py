#
# Copyright (c) 2024–2025, Daily
#
# SPDX-License-Identifier: BSD 2-Clause License
#
"""Whitehorse Real Estate Bot - FastAPI webhook server.

Alternative to long polling: Telegram delivers updates to
``POST /telegram/webhook`` and the bot answers in the background.

It includes:
- The Telegram webhook endpoint.
- Health and configuration endpoints.
- A lifespan that owns the shared aiohttp session.
"""

from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import aiohttp
import uvicorn
from fastapi import BackgroundTasks, FastAPI, Request
from loguru import logger
from pydantic import BaseModel, ConfigDict

from whitehorse_bot import RealEstateBot, __version__
from whitehorse_bot.config import settings


class TelegramUpdate(BaseModel):
    """Incoming Telegram update; only messages are acted on."""

    model_config = ConfigDict(extra="allow")

    update_id: int
    message: Optional[Dict[str, Any]] = None


def create_app(bot: Optional[RealEstateBot] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        bot: Optional pre-built bot. When omitted the lifespan builds one from
            settings and an aiohttp session it owns.
    """

    @asynccontextmanager
    async def lifespan(app_instance: FastAPI):
        """Create the aiohttp session and bot on startup, close them on shutdown."""
        aiohttp_session = None
        if bot is None:
            aiohttp_session = aiohttp.ClientSession()
            try:
                app_instance.state.bot = RealEstateBot.from_settings(aiohttp_session)
            except ValueError:
                await aiohttp_session.close()
                raise
        else:
            app_instance.state.bot = bot
        logger.info("✅ Webhook server ready")

        yield

        await app_instance.state.bot.drain()
        if aiohttp_session is not None:
            await aiohttp_session.close()

    web_app = FastAPI(
        title="Whitehorse Real Estate Bot",
        description="Telegram webhook for Domain.com.au and realestate.com.au listing search",
        version=__version__,
        lifespan=lifespan,
    )

    @web_app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "message": "Whitehorse Real Estate Bot API",
            "version": __version__,
            "endpoints": {
                "webhook": "POST /telegram/webhook - Telegram update delivery",
                "health": "GET /health - Health check",
                "config": "GET /config - Non-sensitive configuration",
            },
        }

    @web_app.post("/telegram/webhook")
    async def telegram_webhook(update: TelegramUpdate, request: Request, background_tasks: BackgroundTasks):
        """Acknowledge the update immediately and handle it after responding."""
        background_tasks.add_task(request.app.state.bot.handle_update, update.model_dump())
        return {"ok": True}

    @web_app.get("/health")
    async def health_check():
        """Health check endpoint with configuration validation."""
        try:
            settings.validate_required_keys()
        except ValueError as e:
            return {"status": "unhealthy", "error": f"Configuration error: {e}"}
        return {"status": "healthy", "version": __version__, "configuration": "valid"}

    @web_app.get("/config")
    async def get_config_info():
        """Get configuration information (without sensitive data)."""
        return {
            "actors": {"domain": settings.DOMAIN_ACTOR, "rea": settings.REA_ACTOR},
            "max_listings_per_source": settings.MAX_LISTINGS_PER_SOURCE,
            "apify_timeouts": {
                "run": settings.APIFY_RUN_TIMEOUT_SECONDS,
                "request": settings.APIFY_REQUEST_TIMEOUT_SECONDS,
            },
            "message_limits": {
                "single": settings.MESSAGE_LIMIT,
                "packed": settings.MESSAGE_PACK_LIMIT,
            },
        }

    return web_app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=settings.WEB_HOST, port=settings.WEB_PORT, log_level=settings.LOG_LEVEL.lower())
