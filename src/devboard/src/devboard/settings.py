import os
from dotenv import load_dotenv
from loguru import logger


DOTENV_PATH = os.getenv("DOTENV_PATH", ".env")
if os.path.exists(DOTENV_PATH):
    load_dotenv(dotenv_path=DOTENV_PATH)
else:
    logger.debug(f"No .env file found at {DOTENV_PATH}, using defaults/environment variables")


# Dashboard
DASHBOARD_CONFIG = os.getenv("DEVBOARD_CONFIG", "dashboard.json")
REFRESH_INTERVAL = float(os.getenv("DEVBOARD_REFRESH_INTERVAL", "60"))  # seconds between refreshes in --watch mode

# Logging
LOG_LEVEL = os.getenv("DEVBOARD_LOG_LEVEL", "INFO").upper()

# Providers
HOST_WIDGETS = os.getenv("DEVBOARD_HOST_WIDGETS", "True") == "True"  # register rh.* widgets for the local host
