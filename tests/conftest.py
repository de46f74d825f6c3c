#
# Copyright (c) 2025, Daily
#
# SPDX-License-Identifier: BSD 2-Clause License
#

"""Shared fakes for bot tests."""

from typing import Any, Dict, List, Optional

import pytest

from whitehorse_bot.bot import RealEstateBot


class FakeTelegram:
    """Records outgoing messages and serves queued update batches."""

    def __init__(self, update_batches: Optional[List[Any]] = None):
        self.sent: List[tuple] = []
        self.update_batches = list(update_batches or [])
        self.bot: Optional[RealEstateBot] = None
        self.poll_offsets: List[Optional[int]] = []

    @property
    def texts(self) -> List[str]:
        return [text for _, text in self.sent]

    async def send_message(self, chat_id, text, parse_mode="Markdown"):
        self.sent.append((chat_id, text))
        return {"message_id": len(self.sent), "chat": {"id": chat_id}, "text": text}

    async def get_updates(self, offset=None, timeout=30):
        self.poll_offsets.append(offset)
        if not self.update_batches:
            self.bot.stop()
            return []
        batch = self.update_batches.pop(0)
        if isinstance(batch, BaseException):
            raise batch
        return batch


class FakeApify:
    """Returns canned items (or raises) per actor id."""

    request_timeout = 90.0

    def __init__(self, responses: Optional[Dict[str, Any]] = None):
        self.responses = responses or {}
        self.calls: List[tuple] = []

    async def run_actor(self, actor_id, run_input):
        self.calls.append((actor_id, run_input))
        result = self.responses.get(actor_id, [])
        if isinstance(result, BaseException):
            raise result
        return result


@pytest.fixture
def telegram():
    return FakeTelegram()


@pytest.fixture
def make_bot(telegram):
    def _make_bot(responses=None, **kwargs):
        bot = RealEstateBot(telegram, FakeApify(responses), polling_retry_seconds=0, **kwargs)
        telegram.bot = bot
        return bot

    return _make_bot


@pytest.fixture
def make_update():
    def _make_update(text, chat_id=42, update_id=1):
        return {
            "update_id": update_id,
            "message": {"message_id": update_id, "chat": {"id": chat_id}, "text": text},
        }

    return _make_update
