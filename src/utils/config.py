"""
Configuration for the Tally expiry engine.

Values are read from the environment (a local .env file is honoured).
"""

import os

from dotenv import load_dotenv

load_dotenv()

# Display locale used by the date formatter ("zh" or "en")
DEFAULT_LOCALE = os.getenv("TALLY_LOCALE", "zh")

# Default search mode ("normal", "glob" or "regex")
DEFAULT_SEARCH_MODE = os.getenv("TALLY_SEARCH_MODE", "normal")

# Urgency thresholds in days
CRITICAL_DAYS = int(os.getenv("TALLY_CRITICAL_DAYS", "7"))
WARNING_DAYS = int(os.getenv("TALLY_WARNING_DAYS", "30"))

# Renewals longer than this are flagged by the renewal validator
MAX_RENEWAL_YEARS = int(os.getenv("TALLY_MAX_RENEWAL_YEARS", "100"))

LOG_LEVEL = os.getenv("TALLY_LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("TALLY_LOG_FILE", "tally.log")
