#
# Copyright (c) 2025, Daily
#
# SPDX-License-Identifier: BSD 2-Clause License
#

"""Configuration settings for the real estate bot."""

import os
from dotenv import load_dotenv

load_dotenv(override=True)

# API Keys
TELEGRAM_TOKEN = os.getenv("TELEGRAM_TOKEN")
APIFY_TOKEN = os.getenv("APIFY_TOKEN")

REQUIRED_KEYS = ("TELEGRAM_TOKEN", "APIFY_TOKEN")

# Endpoints
TELEGRAM_API_URL = os.getenv("TELEGRAM_API_URL", "https://api.telegram.org")
APIFY_API_URL = os.getenv("APIFY_API_URL", "https://api.apify.com")

# Apify Actor IDs
DOMAIN_ACTOR = os.getenv("DOMAIN_ACTOR", "easyapi~domain-com-au-property-scraper")
REA_ACTOR = os.getenv("REA_ACTOR", "pythonscraper~realestate-au")

# Search Settings
MAX_LISTINGS_PER_SOURCE = int(os.getenv("MAX_LISTINGS_PER_SOURCE", "8"))
APIFY_RUN_TIMEOUT_SECONDS = int(os.getenv("APIFY_RUN_TIMEOUT_SECONDS", "60"))
APIFY_MEMORY_MB = int(os.getenv("APIFY_MEMORY_MB", "512"))
APIFY_REQUEST_TIMEOUT_SECONDS = float(os.getenv("APIFY_REQUEST_TIMEOUT_SECONDS", "90"))

# Telegram Settings
TELEGRAM_POLL_TIMEOUT_SECONDS = int(os.getenv("TELEGRAM_POLL_TIMEOUT_SECONDS", "30"))
TELEGRAM_SEND_TIMEOUT_SECONDS = float(os.getenv("TELEGRAM_SEND_TIMEOUT_SECONDS", "10"))
POLLING_RETRY_SECONDS = float(os.getenv("POLLING_RETRY_SECONDS", "5"))

# Telegram rejects messages above 4096 characters
MESSAGE_LIMIT = int(os.getenv("MESSAGE_LIMIT", "4000"))
MESSAGE_PACK_LIMIT = int(os.getenv("MESSAGE_PACK_LIMIT", "3800"))

# Webhook Server
WEB_HOST = os.getenv("WEB_HOST", "0.0.0.0")
WEB_PORT = int(os.getenv("WEB_PORT", "8000"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def validate_required_keys():
    """Raise ValueError if any required credential is missing."""
    missing = [key for key in REQUIRED_KEYS if not globals().get(key)]
    if missing:
        raise ValueError(f"Missing required configuration: {', '.join(missing)}")
