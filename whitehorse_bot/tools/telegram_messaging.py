#
# Copyright (c) 2025, Daily
#
# SPDX-License-Identifier: BSD 2-Clause License
#

"""Telegram Bot API messaging utilities for the real estate bot."""

import json
from typing import Any, Dict, List, Optional

import aiohttp
from loguru import logger

from whitehorse_bot.config import settings
from whitehorse_bot.prompts.chat_messages import LISTING_SEPARATOR


class TelegramAPIError(Exception):
    """Raised when the Bot API answers with ``ok: false``."""

    def __init__(self, method: str, description: str, error_code: Optional[int] = None):
        super().__init__(f"{method} failed: {description}")
        self.method = method
        self.description = description
        self.error_code = error_code

    @property
    def is_markup_error(self) -> bool:
        return "can't parse entities" in self.description.lower()


class TelegramClient:
    """Minimal async Bot API client covering polling and sending messages."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        token: str,
        base_url: str = settings.TELEGRAM_API_URL,
        send_timeout: float = settings.TELEGRAM_SEND_TIMEOUT_SECONDS,
    ):
        self.session = session
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.send_timeout = send_timeout

    async def call(
        self,
        method: str,
        payload: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """Invoke a Bot API method and return its ``result``."""
        url = f"{self.base_url}/bot{self.token}/{method}"
        async with self.session.post(
            url,
            json=payload or {},
            timeout=aiohttp.ClientTimeout(total=timeout or self.send_timeout),
        ) as response:
            try:
                data = await response.json(content_type=None)
            except json.JSONDecodeError:
                raise TelegramAPIError(method, f"non-JSON response (HTTP {response.status})", response.status)

        if not isinstance(data, dict) or not data.get("ok"):
            description = data.get("description", "unknown error") if isinstance(data, dict) else "malformed response"
            error_code = data.get("error_code") if isinstance(data, dict) else None
            raise TelegramAPIError(method, description, error_code)
        return data.get("result")

    async def get_updates(
        self,
        offset: Optional[int] = None,
        timeout: int = settings.TELEGRAM_POLL_TIMEOUT_SECONDS,
    ) -> List[Dict[str, Any]]:
        """Long-poll for new updates."""
        payload: Dict[str, Any] = {"timeout": timeout, "allowed_updates": ["message"]}
        if offset is not None:
            payload["offset"] = offset
        # Leave headroom over the server-side long-poll timeout
        return await self.call("getUpdates", payload, timeout=timeout + 10) or []

    async def send_message(
        self,
        chat_id: int,
        text: str,
        parse_mode: Optional[str] = "Markdown",
    ) -> Dict[str, Any]:
        """Send a message, resending as plain text if Telegram rejects the markup."""
        payload: Dict[str, Any] = {"chat_id": chat_id, "text": text}
        if parse_mode:
            payload["parse_mode"] = parse_mode

        try:
            return await self.call("sendMessage", payload)
        except TelegramAPIError as e:
            if parse_mode and e.is_markup_error:
                logger.warning(f"⚠️ Markdown rejected for chat {chat_id}, resending as plain text")
                return await self.send_message(chat_id, text, parse_mode=None)
            raise


def pack_messages(
    header: str,
    listings: List[str],
    separator: str = LISTING_SEPARATOR,
    limit: int = settings.MESSAGE_LIMIT,
    pack_limit: int = settings.MESSAGE_PACK_LIMIT,
) -> List[str]:
    """Split rendered listings into chat-sized messages.

    Everything goes in one message when it fits under ``limit``. Otherwise
    listings are packed greedily, in order, into messages no longer than
    ``pack_limit``; the header leads the first message.
    """
    full_message = header + separator.join(listings)
    if len(full_message) <= limit:
        return [full_message]

    max_listing = pack_limit - len(separator)
    messages: List[str] = []
    current = header
    for index, listing in enumerate(listings):
        # The first listing always shares its message with the header
        budget = max_listing - (len(header) if index == 0 else 0)
        if len(listing) > budget:
            listing = listing[: budget - 1] + "…"
        if index > 0 and len(current) + len(listing) + len(separator) > pack_limit:
            messages.append(current)
            current = ""
        current += listing + separator
    if current:
        messages.append(current)

    return [message.removesuffix(separator) for message in messages]
