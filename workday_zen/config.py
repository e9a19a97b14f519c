import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")

APP_NAME = "WorkDay Zen"

# Local key-value store
DEFAULT_DATA_DIR = Path.home() / ".workday_zen"
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{DEFAULT_DATA_DIR / 'workday_zen.db'}")

# Tip lookup (Gemini). Without a key the fallback tip is used immediately.
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY")
TIP_MODEL = os.getenv("TIP_MODEL", "gemini-2.5-flash-lite")
TIP_TEMPERATURE = float(os.getenv("TIP_TEMPERATURE", "0.7"))

# Scheduling
TICK_INTERVAL_SECONDS = float(os.getenv("TICK_INTERVAL_SECONDS", "1"))
DAY_CHECK_INTERVAL_SECONDS = float(os.getenv("DAY_CHECK_INTERVAL_SECONDS", "60"))

# Host integrations
ENABLE_INPUT_LISTENER = os.getenv("ENABLE_INPUT_LISTENER", "true").lower() == "true"
ENABLE_DESKTOP_NOTIFICATIONS = os.getenv("ENABLE_DESKTOP_NOTIFICATIONS", "true").lower() == "true"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
