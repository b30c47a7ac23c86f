# finance_core/config.py
import logging
import os

from dotenv import load_dotenv

load_dotenv()

# Seed data for the demo dashboard
SEED_PATH = os.getenv("FINANCE_SEED_PATH", "data/seed.json")

# Display
CURRENCY_SYMBOL = os.getenv("FINANCE_CURRENCY_SYMBOL", "$")
PAGE_TITLE = os.getenv("FINANCE_PAGE_TITLE", "Personal Finance Dashboard")

# Logging
LOG_LEVEL_NAME = os.getenv("FINANCE_LOG_LEVEL", "INFO").upper()


def log_level(name: str = None) -> int:
    """Resolve a level name such as "DEBUG" to its logging constant."""
    name = (name or LOG_LEVEL_NAME).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name}")
    return level
