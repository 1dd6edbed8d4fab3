"""SetupScan Configuration"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Historical data provider (chart endpoint: {url}/historical/{symbol})
PROVIDER_URL = os.getenv("SETUPSCAN_PROVIDER_URL", "http://localhost:3001/api")
PROVIDER_TIMEOUT = float(os.getenv("SETUPSCAN_PROVIDER_TIMEOUT", "30"))
PROVIDER_MAX_RETRIES = int(os.getenv("SETUPSCAN_PROVIDER_MAX_RETRIES", "3"))
PROVIDER_RETRY_DELAY = float(os.getenv("SETUPSCAN_PROVIDER_RETRY_DELAY", "1.0"))

# Logging
LOG_LEVEL = os.getenv("SETUPSCAN_LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("SETUPSCAN_LOG_DIR", "logs")

# Setup defaults (period and granularity must always be chosen explicitly)
DEFAULT_SETUP = {
    "operation": "BUY",
    "reference_price": "PREV_CLOSE",
    "entry_percentage": "1",
    "stop_percentage": "1",
    "initial_capital": "10000",
}
