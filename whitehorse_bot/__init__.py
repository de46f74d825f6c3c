"""
Whitehorse Real Estate Bot Package.
Telegram bot that searches Domain.com.au and realestate.com.au listings.
"""

from .bot import RealEstateBot, run_bot

__version__ = "1.0.0"
__author__ = "Real Estate Bot Team"
__description__ = "Telegram real estate search assistant for the Whitehorse region"

__all__ = ["RealEstateBot", "run_bot"]
