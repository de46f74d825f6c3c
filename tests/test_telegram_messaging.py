#
# Copyright (c) 2025, Daily
#
# SPDX-License-Identifier: BSD 2-Clause License
#

import asyncio

import aiohttp
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from whitehorse_bot.prompts.chat_messages import LISTING_SEPARATOR
from whitehorse_bot.tools import TelegramAPIError, TelegramClient, pack_messages


def run_against_telegram(handler, action):
    """Run ``action(client)`` against an in-process Bot API stub."""

    async def scenario():
        app = web.Application()
        app.router.add_post("/bot{token}/{method}", handler)
        server = TestServer(app)
        await server.start_server()
        try:
            async with aiohttp.ClientSession() as session:
                client = TelegramClient(session, "123:abc", base_url=f"http://{server.host}:{server.port}")
                return await action(client)
        finally:
            await server.close()

    return asyncio.run(scenario())


def test_send_message():
    requests = []

    async def handler(request):
        requests.append((request.match_info["token"], request.match_info["method"], await request.json()))
        return web.json_response({"ok": True, "result": {"message_id": 7}})

    result = run_against_telegram(handler, lambda client: client.send_message(42, "*hi*"))

    assert result == {"message_id": 7}
    assert requests == [("123:abc", "sendMessage", {"chat_id": 42, "text": "*hi*", "parse_mode": "Markdown"})]


def test_send_message_falls_back_to_plain_text():
    payloads = []

    async def handler(request):
        payload = await request.json()
        payloads.append(payload)
        if "parse_mode" in payload:
            return web.json_response(
                {"ok": False, "error_code": 400, "description": "Bad Request: can't parse entities: unclosed tag"},
                status=400,
            )
        return web.json_response({"ok": True, "result": {"message_id": 8}})

    result = run_against_telegram(handler, lambda client: client.send_message(42, "under_score *bold"))

    assert result == {"message_id": 8}
    assert len(payloads) == 2
    assert "parse_mode" not in payloads[1]


def test_send_message_raises_other_errors():
    async def handler(request):
        return web.json_response({"ok": False, "error_code": 403, "description": "Forbidden: bot was blocked by the user"}, status=403)

    with pytest.raises(TelegramAPIError) as exc_info:
        run_against_telegram(handler, lambda client: client.send_message(42, "hi"))

    assert exc_info.value.error_code == 403
    assert exc_info.value.method == "sendMessage"
    assert not exc_info.value.is_markup_error


def test_get_updates_passes_offset():
    payloads = []

    async def handler(request):
        payloads.append(await request.json())
        return web.json_response({"ok": True, "result": [{"update_id": 5}]})

    updates = run_against_telegram(handler, lambda client: client.get_updates(offset=5, timeout=0))

    assert updates == [{"update_id": 5}]
    assert payloads == [{"timeout": 0, "allowed_updates": ["message"], "offset": 5}]


def test_non_json_response():
    async def handler(request):
        return web.Response(text="Bad Gateway", status=502)

    with pytest.raises(TelegramAPIError, match="non-JSON response"):
        run_against_telegram(handler, lambda client: client.get_updates(timeout=0))


def test_pack_messages_single_message():
    messages = pack_messages("Header\n\n", ["one", "two"])

    assert messages == ["Header\n\none" + LISTING_SEPARATOR + "two"]


def test_pack_messages_splits_long_output():
    listings = [f"listing {i:02d} " + "x" * 280 for i in range(20)]

    messages = pack_messages("Header\n\n", listings)

    assert len(messages) >= 2
    assert all(len(message) <= 3800 for message in messages)
    assert messages[0].startswith("Header\n\n")
    assert LISTING_SEPARATOR.join(messages) == "Header\n\n" + LISTING_SEPARATOR.join(listings)


def test_pack_messages_truncates_oversized_listing():
    listings = ["a" * 5000, "b" * 10]

    messages = pack_messages("H\n\n", listings)

    assert all(len(message) <= 3800 for message in messages)
    assert messages[-1].endswith("b" * 10)


def test_pack_messages_header_never_sent_alone():
    messages = pack_messages("HEADER\n\n", ["a" * 5000, "b"])

    assert messages[0].startswith("HEADER\n\naaa")
    assert messages[0].endswith("…")
    assert len(messages[0]) <= 3800
    assert messages[1] == "b"
