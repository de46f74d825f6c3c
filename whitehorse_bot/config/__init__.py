"""Configuration package for the real estate bot."""
