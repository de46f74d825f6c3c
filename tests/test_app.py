#
# Copyright (c) 2025, Daily
#
# SPDX-License-Identifier: BSD 2-Clause License
#

import pytest
from fastapi.testclient import TestClient

from app import create_app
from whitehorse_bot.config import settings
from whitehorse_bot.prompts import WELCOME_MESSAGE


@pytest.fixture
def client(make_bot):
    with TestClient(create_app(bot=make_bot())) as test_client:
        yield test_client


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "webhook" in response.json()["endpoints"]


def test_webhook_handles_update(client, telegram, make_update):
    response = client.post("/telegram/webhook", json=make_update("/start", chat_id=99))

    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert telegram.sent == [(99, WELCOME_MESSAGE)]


def test_webhook_rejects_malformed_update(client, telegram):
    response = client.post("/telegram/webhook", json={"message": {"text": "/start"}})

    assert response.status_code == 422
    assert telegram.sent == []


def test_health_reports_missing_configuration(client, monkeypatch):
    monkeypatch.setattr(settings, "TELEGRAM_TOKEN", None)
    monkeypatch.setattr(settings, "APIFY_TOKEN", None)

    body = client.get("/health").json()

    assert body["status"] == "unhealthy"
    assert "TELEGRAM_TOKEN, APIFY_TOKEN" in body["error"]


def test_health_ok(client, monkeypatch):
    monkeypatch.setattr(settings, "TELEGRAM_TOKEN", "123:abc")
    monkeypatch.setattr(settings, "APIFY_TOKEN", "apify")

    assert client.get("/health").json()["status"] == "healthy"


def test_config_hides_credentials(client, monkeypatch):
    monkeypatch.setattr(settings, "TELEGRAM_TOKEN", "123:abc")

    response = client.get("/config")

    assert response.status_code == 200
    assert response.json()["message_limits"] == {"single": 4000, "packed": 3800}
    assert "123:abc" not in response.text
