"""
Real Estate Bot - Command Routing and Search Orchestration.
Turns chat messages into listing searches across Domain.com.au and
realestate.com.au and replies with formatted results.
"""

import asyncio
import re
import sys
from typing import Any, Dict, List, Optional, Sequence, Set

import aiohttp
from loguru import logger

from .config import settings
from .prompts import (
    ERROR_PROMPTS,
    HELP_MESSAGE,
    NO_SUBURB_MESSAGE,
    USAGE_MESSAGE,
    WELCOME_MESSAGE,
)
from .search import SourceOutcome, looks_like_search, parse_query
from .tools import (
    SOURCES,
    ApifyClient,
    ListingSource,
    TelegramAPIError,
    TelegramClient,
    fetch_listings,
    format_listing,
    format_results_header,
    format_search_summary,
    pack_messages,
)

# Command name -> source scope
SEARCH_SCOPES = {"search": "both", "domain": "domain", "rea": "rea"}

COMMAND_PATTERN = re.compile(r"^/(\w+)(?:@\w+)?(?:\s+(.*))?$", re.DOTALL)


class RealEstateBot:
    """
    Application context for one bot process.
    Holds the Telegram and Apify clients and handles every incoming update.
    """

    def __init__(
        self,
        telegram: TelegramClient,
        apify: ApifyClient,
        sources: Optional[Sequence[ListingSource]] = None,
        max_items: int = settings.MAX_LISTINGS_PER_SOURCE,
        polling_retry_seconds: float = settings.POLLING_RETRY_SECONDS,
    ):
        self.telegram = telegram
        self.apify = apify
        self.sources = list(sources or SOURCES)
        self.max_items = max_items
        self.polling_retry_seconds = polling_retry_seconds
        self.is_running = False
        self._tasks: Set[asyncio.Task] = set()

    @classmethod
    def from_settings(cls, session: aiohttp.ClientSession) -> "RealEstateBot":
        """Build a bot from validated configuration, sharing one HTTP session."""
        settings.validate_required_keys()
        return cls(
            telegram=TelegramClient(session, settings.TELEGRAM_TOKEN),
            apify=ApifyClient(session, settings.APIFY_TOKEN),
        )

    def select_sources(self, scope: str) -> List[ListingSource]:
        if scope == "both":
            return list(self.sources)
        return [source for source in self.sources if source.key == scope]

    async def handle_update(self, update: Dict[str, Any]):
        """Entry point for a single Telegram update; errors stop here."""
        message = update.get("message") or {}
        chat_id = (message.get("chat") or {}).get("id")
        text = message.get("text")
        if chat_id is None or not text:
            return

        try:
            await self.handle_text(chat_id, text)
        except Exception:
            logger.exception(f"❌ Error handling message in chat {chat_id}")

    async def handle_text(self, chat_id: int, text: str):
        """Route a command or an implicit search."""
        match = COMMAND_PATTERN.match(text.strip())
        if match:
            command = match.group(1).lower()
            args = (match.group(2) or "").strip()

            if command == "start":
                await self.telegram.send_message(chat_id, WELCOME_MESSAGE)
            elif command == "help":
                await self.telegram.send_message(chat_id, HELP_MESSAGE)
            elif command in SEARCH_SCOPES:
                if args:
                    await self.handle_search(chat_id, args, SEARCH_SCOPES[command])
                else:
                    await self.telegram.send_message(chat_id, USAGE_MESSAGE.format(command=command))
            else:
                logger.debug(f"Ignoring unknown command /{command}")
            return

        if not text.startswith("/") and looks_like_search(text):
            await self.handle_search(chat_id, text, "both")

    async def handle_search(self, chat_id: int, text: str, scope: str = "both"):
        """
        Run one search end-to-end.
        Every selected source is queried concurrently; replies follow source
        order, and one source failing never holds back another's results.
        """
        params = parse_query(text)
        if not params.suburb:
            logger.info(f"⚠️ No suburb detected in '{text}'")
            await self.telegram.send_message(chat_id, NO_SUBURB_MESSAGE)
            return

        await self.telegram.send_message(chat_id, format_search_summary(params))

        searches = [(source, source.build_url(params)) for source in self.select_sources(scope)]
        outcomes = await asyncio.gather(
            *(fetch_listings(self.apify, source, url, self.max_items) for source, url in searches),
            return_exceptions=True,
        )

        for (source, url), outcome in zip(searches, outcomes):
            if isinstance(outcome, BaseException):
                logger.error(f"❌ {source.name} search was rejected: {outcome!r}")
                continue

            try:
                await self._send_outcome(chat_id, source, url, outcome)
            except (TelegramAPIError, aiohttp.ClientError, asyncio.TimeoutError):
                logger.exception(f"❌ Failed to deliver {source.name} results to chat {chat_id}")

        logger.info(f"✅ Search for chat {chat_id} completed")

    async def _send_outcome(self, chat_id: int, source: ListingSource, url: str, outcome: SourceOutcome):
        """Reply with one source's results, error or empty-result notice."""
        if not outcome.succeeded:
            await self.telegram.send_message(
                chat_id,
                ERROR_PROMPTS["source_error"].format(label=source.label, error=outcome.error, url=url),
            )
            return

        if not outcome.results:
            await self.telegram.send_message(
                chat_id,
                ERROR_PROMPTS["no_results"].format(label=source.label, url=url),
            )
            return

        header = format_results_header(source.label, len(outcome.results))
        listings = [format_listing(record, source.icon) for record in outcome.results]
        for chunk in pack_messages(header, listings):
            await self.telegram.send_message(chat_id, chunk)

    def dispatch(self, update: Dict[str, Any]) -> asyncio.Task:
        """Handle an update in its own task so slow searches don't block polling."""
        task = asyncio.create_task(self.handle_update(update))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self):
        """Wait for in-flight updates to finish."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    def stop(self):
        self.is_running = False

    async def run_polling(self):
        """Long-poll Telegram until stop() is called."""
        logger.info("🚀 Polling Telegram for updates...")
        self.is_running = True
        offset: Optional[int] = None

        try:
            while self.is_running:
                try:
                    updates = await self.telegram.get_updates(offset=offset)
                except (aiohttp.ClientError, asyncio.TimeoutError, TelegramAPIError) as e:
                    logger.error(f"❌ Polling error: {e}")
                    await asyncio.sleep(self.polling_retry_seconds)
                    continue

                for update in updates:
                    offset = update["update_id"] + 1
                    self.dispatch(update)
        finally:
            self.is_running = False
            await self.drain()
            logger.info("🛑 Bot polling stopped")


async def run_bot():
    """
    Main entry point for running the bot in long-polling mode.
    Missing credentials are fatal.
    """
    async with aiohttp.ClientSession() as session:
        bot = RealEstateBot.from_settings(session)
        await bot.run_polling()


def main():
    logger.remove()
    logger.add(sys.stderr, level=settings.LOG_LEVEL)
    logger.info("🏡 Whitehorse RE Bot starting...")

    try:
        settings.validate_required_keys()
    except ValueError as config_error:
        logger.error(f"❌ Configuration error: {config_error}")
        sys.exit(1)

    try:
        asyncio.run(run_bot())
    except KeyboardInterrupt:
        logger.info("👋 Bot stopped")
