#
# Copyright (c) 2025, Daily
#
# SPDX-License-Identifier: BSD 2-Clause License
#

"""Prompts module for the real estate bot."""

from .chat_messages import (
    WELCOME_MESSAGE,
    HELP_MESSAGE,
    USAGE_MESSAGE,
    NO_SUBURB_MESSAGE,
    SEARCHING_MESSAGE,
    ERROR_PROMPTS,
)

__all__ = [
    "WELCOME_MESSAGE",
    "HELP_MESSAGE",
    "USAGE_MESSAGE",
    "NO_SUBURB_MESSAGE",
    "SEARCHING_MESSAGE",
    "ERROR_PROMPTS",
]
