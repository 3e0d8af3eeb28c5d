"""
Configuration management for the Mod Collection Ranker.
Handles environment variables and application settings.
"""
import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Application configuration loaded from environment variables."""

    # Server settings
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8081"))
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "json")  # json or console

    # Remote listing
    SOURCE_BASE_URL: str = os.getenv("SOURCE_BASE_URL", "https://swgoh.gg")
    REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "30"))
    MAX_CONCURRENT_PAGES: int = int(os.getenv("MAX_CONCURRENT_PAGES", "8"))

    # Only mods at or above both thresholds feed the stat ranges
    QUALIFY_MIN_LEVEL: int = int(os.getenv("QUALIFY_MIN_LEVEL", "12"))
    QUALIFY_MIN_PIPS: int = int(os.getenv("QUALIFY_MIN_PIPS", "4"))


config = Config()
