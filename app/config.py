# app/config.py
"""Configuration management."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_LOCAL_PATH = Path(__file__).resolve().parent / "data" / "books.json"


class Config:
    """Application configuration."""

    # Remote catalog source. Empty means "local dataset only".
    BOOKS_REMOTE_URL = os.getenv("BOOKS_REMOTE_URL", "")
    BOOKS_REMOTE_TIMEOUT = float(os.getenv("BOOKS_REMOTE_TIMEOUT", "10"))

    # Bundled fallback dataset
    BOOKS_LOCAL_PATH = Path(os.getenv("BOOKS_LOCAL_PATH") or DEFAULT_LOCAL_PATH)

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
